"""Unit tests for input validation and result structures."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from reward_vault.models.enums import RewardCategory, RewardStatus
from reward_vault.models.reward_account import RewardAccount
from reward_vault.schemas import (
    BulkCreateResult,
    BulkFailure,
    CreateRewardAccountInput,
    CredentialAccess,
    Page,
    Pagination,
    SortOptions,
    UpdateRewardAccountInput,
    to_view,
)


class TestCreateRewardAccountInput:
    """Tests for new account validation."""

    def test_valid_input(self, valid_account_data):
        """Valid data is accepted and trimmed."""
        payload = CreateRewardAccountInput.model_validate(
            valid_account_data(service_name="  Netflix  ")
        )

        assert payload.service_name == "Netflix"
        assert payload.category == RewardCategory.STREAMING_SERVICE

    def test_category_from_string(self, valid_account_data):
        """Category accepts its string value."""
        payload = CreateRewardAccountInput.model_validate(valid_account_data(category="GIFT_CARD"))
        assert payload.category == RewardCategory.GIFT_CARD

    @pytest.mark.parametrize("missing", ["service_name", "account_type", "category", "credentials", "created_by"])
    def test_required_fields(self, valid_account_data, missing):
        """Every required field must be present."""
        data = valid_account_data()
        del data[missing]

        with pytest.raises(ValidationError):
            CreateRewardAccountInput.model_validate(data)

    def test_length_limits(self, valid_account_data):
        """Oversized fields are rejected."""
        with pytest.raises(ValidationError):
            CreateRewardAccountInput.model_validate(valid_account_data(service_name="x" * 256))
        with pytest.raises(ValidationError):
            CreateRewardAccountInput.model_validate(valid_account_data(credentials="x" * 1001))
        with pytest.raises(ValidationError):
            CreateRewardAccountInput.model_validate(valid_account_data(description="x" * 1001))

    def test_unknown_category_rejected(self, valid_account_data):
        """Only known categories are accepted."""
        with pytest.raises(ValidationError):
            CreateRewardAccountInput.model_validate(valid_account_data(category="CRYPTO"))

    def test_credentials_hidden_from_repr(self, valid_account_data):
        """Plaintext credentials never appear in repr."""
        payload = CreateRewardAccountInput.model_validate(valid_account_data(credentials="hunter2"))
        assert "hunter2" not in repr(payload)

    def test_status_not_accepted(self, valid_account_data):
        """Status cannot be set at creation."""
        with pytest.raises(ValidationError):
            CreateRewardAccountInput.model_validate(valid_account_data(status="ASSIGNED"))


class TestUpdateRewardAccountInput:
    """Tests for descriptor updates."""

    def test_changes_only_include_set_fields(self):
        """Unset fields are not part of the change set."""
        payload = UpdateRewardAccountInput(description="New text")
        assert payload.changes() == {"description": "New text"}

    def test_status_not_editable(self):
        """Status moves only through lifecycle operations."""
        with pytest.raises(ValidationError):
            UpdateRewardAccountInput.model_validate({"status": "AVAILABLE"})


class TestQueryOptions:
    """Tests for pagination and sorting."""

    def test_defaults(self):
        """Default page 1, limit 10, created_at desc."""
        pagination = Pagination()
        sort = SortOptions()

        assert (pagination.page, pagination.limit, pagination.offset) == (1, 10, 0)
        assert (sort.sort_by, sort.sort_order) == ("created_at", "desc")

    def test_offset(self):
        """Offset skips previous pages."""
        assert Pagination(page=3, limit=20).offset == 40

    @pytest.mark.parametrize("page, limit", [(0, 10), (1, 0), (1, 101)])
    def test_invalid_pagination(self, page, limit):
        """Page must be >= 1 and limit within 1..100."""
        with pytest.raises(ValidationError):
            Pagination(page=page, limit=limit)

    def test_unknown_sort_field_falls_back(self):
        """Unknown sort fields fall back to created_at."""
        assert SortOptions(sort_by="encrypted_credentials").sort_by == "created_at"
        assert SortOptions(sort_by="service_name").sort_by == "service_name"

    def test_invalid_sort_order(self):
        """Only asc and desc are accepted."""
        with pytest.raises(ValidationError):
            SortOptions(sort_order="sideways")


class TestResults:
    """Tests for result structures."""

    def test_page_navigation(self):
        """Page metadata is derived from total and limit."""
        page = Page(data=[], total=25, page=2, limit=10)

        assert page.total_pages == 3
        assert page.has_next_page is True
        assert page.has_previous_page is True

    def test_last_page(self):
        """Last page has no next page."""
        page = Page(data=[], total=25, page=3, limit=10)
        assert page.has_next_page is False

    def test_empty_page(self):
        """Empty result has zero pages."""
        page = Page(data=[], total=0, page=1, limit=10)

        assert page.total_pages == 0
        assert page.has_next_page is False
        assert page.has_previous_page is False

    def test_bulk_summary(self):
        """Summary counts successes and failures."""
        result = BulkCreateResult(
            successful=[],
            failed=[BulkFailure(index=0, input={}, error="bad", error_code="BAD_REQUEST")],
        )

        summary = result.summary
        assert (summary.total, summary.successful, summary.failed) == (1, 0, 1)

    def test_view_has_no_credentials(self):
        """Views never carry encrypted credentials."""
        now = datetime.now(UTC)
        account = RewardAccount(
            id=7,
            service_name="Spotify",
            account_type="Family",
            category=RewardCategory.SUBSCRIPTION,
            encrypted_credentials="blob",
            status=RewardStatus.AVAILABLE,
            created_by=1,
            created_at=now,
            updated_at=now,
        )

        view = to_view(account)

        assert view.id == 7
        assert view.status == RewardStatus.AVAILABLE
        assert not hasattr(view, "encrypted_credentials")
        assert "blob" not in repr(view)

    def test_credential_access_repr_hides_plaintext(self):
        """Decrypted credentials are excluded from repr."""
        access = CredentialAccess(
            reward_account_id=1,
            service_name="Netflix",
            account_type="Premium",
            decrypted_credentials="hunter2",
            accessed_at=datetime.now(UTC),
            accessed_by=1,
            access_reason="Delivery",
            audit_log_id=1,
            audit_warning="recorded",
        )
        assert "hunter2" not in repr(access)
