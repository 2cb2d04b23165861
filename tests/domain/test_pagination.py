"""Tests for the paginated listing helper."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.shared.pagination import MAX_PAGE_SIZE, paginate
from storefront.user.user import User


@pytest.fixture()
def users():
    repo = current_domain.repository_for(User)
    for i in range(12):
        repo.add(User.register(name=f"User {i:02d}", email=f"user{i:02d}@example.com"))


@pytest.mark.usefixtures("users")
class TestPaginate:
    def test_first_page(self):
        page = paginate(User, page=1, limit=5, sort="name", order="asc")
        assert [u.name for u in page.items] == [f"User {i:02d}" for i in range(5)]
        assert page.to_pagination() == {
            "current_page": 1,
            "total_pages": 3,
            "total_items": 12,
            "items_per_page": 5,
        }

    def test_last_page_is_partial(self):
        page = paginate(User, page=3, limit=5, sort="name", order="asc")
        assert len(page.items) == 2

    def test_descending_order(self):
        page = paginate(User, limit=1, sort="name", order="desc")
        assert page.items[0].name == "User 11"

    def test_filters_ignore_none(self):
        page = paginate(User, filters={"email": "user03@example.com", "loyalty_tier": None})
        assert page.total_items == 1

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"page": 0}, "page"),
            ({"limit": MAX_PAGE_SIZE + 1}, "limit"),
            ({"sort": "password"}, "sort"),
            ({"order": "sideways"}, "order"),
        ],
    )
    def test_rejects_bad_arguments(self, kwargs, field):
        with pytest.raises(ValidationError) as exc:
            paginate(User, **kwargs)
        assert field in exc.value.messages
