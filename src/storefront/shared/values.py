from protean.utils.reflection import declared_fields


def replace_value(vo_cls, current, **changes):
    """Return a new ``vo_cls`` built from ``current`` with ``changes`` applied.

    Value objects are immutable, so partial updates rebuild the whole object.
    """
    data = {name: getattr(current, name) for name in declared_fields(vo_cls)} if current else {}
    data.update(changes)
    return vo_cls(**data)
