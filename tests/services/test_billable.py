from datetime import datetime, timedelta, timezone
from decimal import Decimal

from freezegun import freeze_time

from servicedesk.models.invoice import BillableRow, InvoiceStatus, RowSource, StatusFilter
from servicedesk.services.billable import classify, flatten_to_billable_rows, present

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _row(name: str, paid: bool = False, is_overdue: bool = False, **kwargs) -> BillableRow:
    return BillableRow(source=RowSource.RENEWAL, service_name=name, paid=paid, is_overdue=is_overdue, **kwargs)


class TestClassify:
    def test_past_due_unpaid_is_overdue(self):
        assert classify(NOW - timedelta(days=1), False, NOW) == (False, True)

    def test_paid_is_never_overdue(self):
        assert classify(NOW - timedelta(days=1), True, NOW) == (True, False)

    def test_future_due_not_overdue(self):
        assert classify(NOW + timedelta(days=1), False, NOW) == (False, False)

    def test_no_due_date_not_overdue(self):
        assert classify(None, False, NOW) == (False, False)

    def test_naive_datetimes(self):
        assert classify(datetime(2023, 12, 31), False, datetime(2024, 1, 1)) == (False, True)
        assert classify(NOW + timedelta(hours=1), False, datetime(2024, 1, 1)) == (False, False)


class TestFlattenToBillableRows:
    def test_no_renewals_yields_single_service_row(self, sample_assignment):
        rows = flatten_to_billable_rows([sample_assignment(isaccepted="accepted")], now=NOW)
        assert len(rows) == 1
        row = rows[0]
        assert row.source == RowSource.SERVICE
        assert row.renewal_id is None
        assert row.amount == Decimal("100")
        assert row.paid is True
        assert row.due_date == datetime(2023, 12, 31, tzinfo=timezone.utc)
        assert row.invoice_id == "INV-1001"

    def test_service_row_never_overdue(self, sample_assignment):
        # end_date is in the past and the assignment is not accepted
        rows = flatten_to_billable_rows([sample_assignment(isaccepted="pending")], now=NOW)
        assert rows[0].paid is False
        assert rows[0].is_overdue is False
        assert rows[0].status == InvoiceStatus.UNPAID

    def test_service_row_without_end_date(self, sample_assignment):
        rows = flatten_to_billable_rows([sample_assignment(end_date=None, price=None)], now=NOW)
        assert rows[0].due_date is None
        assert rows[0].amount == Decimal("0")

    def test_one_row_per_renewal(self, sample_assignment):
        renewals = [
            {"_id": f"r{i}", "date": f"2024-0{i}-01", "price": 10 * i, "haspaid": False}
            for i in range(1, 4)
        ]
        rows = flatten_to_billable_rows([sample_assignment(renewal_dates=renewals)], now=NOW)
        assert len(rows) == 3
        assert [r.renewal_id for r in rows] == ["r1", "r2", "r3"]
        assert all(r.source == RowSource.RENEWAL for r in rows)

    def test_renewal_price_falls_back_to_assignment(self, sample_assignment):
        renewals = [{"_id": "r1", "date": "2024-02-01", "haspaid": False}]
        rows = flatten_to_billable_rows([sample_assignment(price="75", renewal_dates=renewals)], now=NOW)
        assert rows[0].amount == Decimal("75")

    def test_renewal_price_zero_is_kept(self, sample_assignment):
        renewals = [{"_id": "r1", "date": "2024-02-01", "price": 0, "haspaid": False}]
        rows = flatten_to_billable_rows([sample_assignment(renewal_dates=renewals)], now=NOW)
        assert rows[0].amount == Decimal("0")

    def test_overdue_scenario(self, sample_assignment):
        renewals = [{"date": "2020-01-01", "haspaid": False, "price": 50}]
        rows = flatten_to_billable_rows([sample_assignment(renewal_dates=renewals)], now=NOW)
        assert rows[0].amount == Decimal("50")
        assert rows[0].paid is False
        assert rows[0].is_overdue is True
        assert rows[0].status == InvoiceStatus.OVERDUE

    def test_naive_now_is_read_as_utc(self, sample_assignment):
        renewals = [
            {"_id": "late", "date": "2020-01-01", "haspaid": False, "price": 50},
            {"_id": "soon", "date": "2024-01-01T00:00:01Z", "haspaid": False, "price": 50},
        ]
        rows = flatten_to_billable_rows([sample_assignment(renewal_dates=renewals)], now=datetime(2024, 1, 1))
        assert [(r.renewal_id, r.is_overdue) for r in rows] == [("late", True), ("soon", False)]

    def test_renewal_without_date_is_unpaid_not_overdue(self, sample_assignment):
        renewals = [{"_id": "r1", "date": None, "haspaid": False, "price": 20}]
        rows = flatten_to_billable_rows([sample_assignment(renewal_dates=renewals)], now=NOW)
        assert rows[0].due_date is None
        assert rows[0].is_overdue is False
        assert rows[0].status == InvoiceStatus.UNPAID

    def test_paid_renewal(self, sample_assignment):
        renewals = [{"_id": "r1", "date": "2020-01-01", "haspaid": True, "price": 20}]
        rows = flatten_to_billable_rows([sample_assignment(renewal_dates=renewals)], now=NOW)
        assert rows[0].status == InvoiceStatus.PAID

    def test_order_follows_assignments_then_renewals(self, sample_assignment):
        a = sample_assignment(_id="a", renewal_dates=[{"_id": "a2", "date": "2025-01-01"}, {"_id": "a1"}])
        b = sample_assignment(_id="b")
        rows = flatten_to_billable_rows([a, b], now=NOW)
        assert [(r.service_id, r.renewal_id) for r in rows] == [("a", "a2"), ("a", "a1"), ("b", None)]

    def test_row_count_invariant(self, sample_assignment):
        assignments = [
            sample_assignment(_id="x"),
            sample_assignment(_id="y", renewal_dates=[{"_id": "1"}]),
            sample_assignment(_id="z", renewal_dates=[{"_id": "1"}, {"_id": "2"}, {"_id": "3"}]),
        ]
        rows = flatten_to_billable_rows(assignments, now=NOW)
        assert len(rows) == sum(max(1, len(a.renewal_dates)) for a in assignments)

    def test_empty_input(self):
        assert flatten_to_billable_rows([], now=NOW) == []

    @freeze_time("2024-06-01 12:00:00")
    def test_defaults_to_current_time(self, sample_assignment):
        renewals = [
            {"_id": "past", "date": "2024-05-31", "haspaid": False},
            {"_id": "future", "date": "2024-06-02", "haspaid": False},
        ]
        rows = flatten_to_billable_rows([sample_assignment(renewal_dates=renewals)])
        assert [r.is_overdue for r in rows] == [True, False]


class TestPresent:
    def test_orders_overdue_unpaid_paid(self):
        rows = [
            _row("paid-1", paid=True),
            _row("unpaid-1"),
            _row("overdue-1", is_overdue=True),
            _row("paid-2", paid=True),
            _row("overdue-2", is_overdue=True),
            _row("unpaid-2"),
        ]
        result = present(rows, "", StatusFilter.ALL)
        assert [r.service_name for r in result] == [
            "overdue-1",
            "overdue-2",
            "unpaid-1",
            "unpaid-2",
            "paid-1",
            "paid-2",
        ]

    def test_stable_within_bucket(self):
        rows = [_row("B", is_overdue=True), _row("A", is_overdue=True)]
        assert [r.service_name for r in present(rows, "", "all")] == ["B", "A"]

    def test_does_not_mutate_input(self):
        rows = [_row("p", paid=True), _row("o", is_overdue=True)]
        present(rows)
        assert [r.service_name for r in rows] == ["p", "o"]

    def test_status_filters(self):
        rows = [_row("p", paid=True), _row("u"), _row("o", is_overdue=True)]
        assert [r.service_name for r in present(rows, status=StatusFilter.PAID)] == ["p"]
        assert [r.service_name for r in present(rows, status=StatusFilter.UNPAID)] == ["u"]
        assert [r.service_name for r in present(rows, status=StatusFilter.OVERDUE)] == ["o"]
        assert len(present(rows, status=StatusFilter.ALL)) == 3

    def test_unpaid_and_overdue_exclusive(self):
        rows = [_row("u"), _row("o", is_overdue=True)]
        unpaid = present(rows, status="unpaid")
        overdue = present(rows, status="overdue")
        assert not {id(r) for r in unpaid} & {id(r) for r in overdue}

    def test_search_is_case_insensitive_substring(self):
        rows = [_row("x", invoice_id="INV-1001"), _row("y", invoice_id="INV-2002")]
        assert [r.invoice_id for r in present(rows, "inv-10")] == ["INV-1001"]

    def test_search_uses_first_non_empty_reference(self):
        # invoice_id wins over service_name, so the name alone doesn't match
        rows = [_row("Hosting", invoice_id="INV-1"), _row("Hosting Plus")]
        assert [r.service_name for r in present(rows, "hosting")] == ["Hosting Plus"]

    def test_search_falls_back_to_service_id(self):
        rows = [_row("Hosting", service_id="65abc")]
        assert len(present(rows, "65A")) == 1
        assert present(rows, "hosting") == []

    def test_blank_search_ignored(self):
        rows = [_row("a"), _row("b")]
        assert len(present(rows, "   ")) == 2
