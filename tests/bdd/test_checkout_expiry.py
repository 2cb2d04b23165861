"""BDD tests for the expired checkout sweep."""

from datetime import UTC, datetime, timedelta

from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when
from storefront.checkout.cleanup import CleanupExpiredCheckouts

scenarios("features/checkout_expiry.feature")


def _sweep(as_of):
    return current_domain.process(CleanupExpiredCheckouts(as_of=as_of), asynchronous=False)


@when(parsers.cfparse("expired checkouts are cleaned up {minutes:d} minutes from now"))
def clean_up(ctx, minutes):
    ctx["as_of"] = datetime.now(UTC) + timedelta(minutes=minutes)
    ctx["deleted"] = _sweep(ctx["as_of"])


@then(parsers.cfparse("{count:d} checkout is deleted"))
@then(parsers.cfparse("{count:d} checkouts are deleted"))
def deleted_count(ctx, count):
    assert ctx["deleted"] == count


@then(parsers.cfparse("cleaning up again deletes {count:d} checkouts"))
def clean_up_again(ctx, count):
    assert _sweep(ctx["as_of"]) == count
