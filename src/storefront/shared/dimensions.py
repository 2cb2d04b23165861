"""Physical dimensions value object, shared by variants and shipment items."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, String

from storefront.domain import storefront


@storefront.value_object
class Dimensions:
    length = Float(default=0.0, min_value=0.0)
    width = Float(default=0.0, min_value=0.0)
    height = Float(default=0.0, min_value=0.0)
    unit = String(max_length=2, default="cm")

    @invariant.post
    def unit_must_be_valid(self):
        if self.unit not in ("cm", "in"):
            raise ValidationError({"unit": [f"Dimension unit must be 'cm' or 'in', got '{self.unit}'"]})
