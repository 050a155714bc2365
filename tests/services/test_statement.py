from datetime import datetime, timezone
from decimal import Decimal

from servicedesk.models.assignment import BillingCycle
from servicedesk.services.statement import build_statement, invoice_number, next_renewal_date

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestInvoiceNumber:
    def test_uses_invoice_id(self, sample_assignment):
        assert invoice_number(sample_assignment()) == "INV-1001"

    def test_falls_back_to_assignment_id(self, sample_assignment):
        assert invoice_number(sample_assignment(invoice_id="")) == "INV-C3D4E5F6"


class TestNextRenewalDate:
    def test_monthly(self):
        end = datetime(2024, 1, 31, tzinfo=timezone.utc)
        assert next_renewal_date(end, BillingCycle.MONTHLY, NOW) == datetime(2024, 2, 29, tzinfo=timezone.utc)

    def test_annual(self):
        end = datetime(2024, 6, 1, tzinfo=timezone.utc)
        assert next_renewal_date(end, BillingCycle.ANNUAL, NOW) == datetime(2025, 6, 1, tzinfo=timezone.utc)

    def test_in_the_past(self):
        end = datetime(2022, 6, 1, tzinfo=timezone.utc)
        assert next_renewal_date(end, BillingCycle.MONTHLY, NOW) is None

    def test_naive_now(self):
        end = datetime(2024, 1, 31, tzinfo=timezone.utc)
        assert next_renewal_date(end, BillingCycle.MONTHLY, datetime(2024, 1, 1)) == datetime(
            2024, 2, 29, tzinfo=timezone.utc
        )

    def test_no_cycle_or_end_date(self):
        end = datetime(2024, 6, 1, tzinfo=timezone.utc)
        assert next_renewal_date(end, BillingCycle.NONE, NOW) is None
        assert next_renewal_date(None, BillingCycle.MONTHLY, NOW) is None


class TestBuildStatement:
    def test_base_line_only(self, sample_assignment):
        statement = build_statement(sample_assignment(), now=NOW)
        assert statement.invoice_number == "INV-1001"
        assert len(statement.lines) == 1
        assert statement.lines[0].label == "Managed Hosting"
        assert statement.subtotal == Decimal("100")
        # end_date 2023-12-31 + 1 month is after NOW
        assert statement.next_renewal_date == datetime(2024, 1, 31, tzinfo=timezone.utc)

    def test_includes_only_paid_renewals_sorted_by_date(self, sample_assignment):
        renewals = [
            {"_id": "r3", "label": "", "date": "2023-04-01", "price": 30, "haspaid": True},
            {"_id": "r1", "label": "Feb", "date": "2023-02-01", "price": 10, "haspaid": True},
            {"_id": "r2", "label": "Mar", "date": "2023-03-01", "price": 20, "haspaid": False},
            {"_id": "r4", "label": "Undated", "price": 5, "haspaid": True},
        ]
        statement = build_statement(sample_assignment(renewal_dates=renewals), now=NOW)
        assert [line.label for line in statement.lines] == ["Managed Hosting", "Feb", "Renewal #2", "Undated"]
        assert statement.subtotal == Decimal("145")

    def test_malformed_amounts_count_as_zero(self, sample_assignment):
        renewals = [{"_id": "r1", "date": "2023-02-01", "price": "oops", "haspaid": True}]
        statement = build_statement(sample_assignment(price="n/a", renewal_dates=renewals), now=NOW)
        assert statement.subtotal == Decimal("0")

    def test_issue_date_defaults_to_now(self, sample_assignment):
        statement = build_statement(sample_assignment(createdAt=None, start_date=None), now=NOW)
        assert statement.issue_date == NOW

    def test_naive_now(self, sample_assignment):
        statement = build_statement(sample_assignment(cycle="annual"), now=datetime(2024, 1, 1))
        assert statement.next_renewal_date == datetime(2024, 12, 31, tzinfo=timezone.utc)
        assert statement.issue_date == datetime(2022, 12, 20, 10, 0, tzinfo=timezone.utc)
