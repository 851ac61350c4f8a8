"""Tests for the fixed-grid cash book."""

import logging

import pytest

from bizdoc.cash_book import (
    CASH_BOOK_ROWS, CashBookMeta, CashBookTxn, build_cash_book, cash_book_template,
    column_totals, transaction_value, truncated_rows,
)


def receipts(count, cash=100.0, bank=0.0):
    return [
        CashBookTxn(date=f"{i + 1:02d}/01", particulars=f"Client {i + 1}", ref=f"RC{i + 1}",
                    cash=cash, bank=bank)
        for i in range(count)
    ]


class TestBuildCashBook:
    def test_single_page(self):
        assert len(build_cash_book([], [], CashBookMeta())) == 1

    def test_empty_grid(self):
        inputs = build_cash_book([], [], CashBookMeta())[0]
        for side in ("receipts", "payments"):
            for row in range(1, CASH_BOOK_ROWS + 1):
                assert inputs[f"{side}_date_{row}"] == ""
                assert inputs[f"{side}_cash_{row}"] == ""
            assert inputs[f"{side}_total_cash"] == "0.00"
            assert inputs[f"{side}_total_label"] == "TOTAL"

    def test_one_receipt(self):
        inputs = build_cash_book(receipts(1, cash=1500, bank=0), [], CashBookMeta())[0]
        assert inputs["receipts_date_1"] == "01/01"
        assert inputs["receipts_particulars_1"] == "Client 1"
        assert inputs["receipts_cash_1"] == "1,500.00"
        assert inputs["receipts_bank_1"] == "0.00"
        assert inputs["receipts_date_2"] == ""
        assert inputs["receipts_total_cash"] == "1,500.00"

    def test_grid_is_capped_but_totals_are_not(self):
        inputs = build_cash_book(receipts(15), receipts(3, cash=0, bank=50), CashBookMeta())[0]

        shown = [row for row in range(1, CASH_BOOK_ROWS + 1) if inputs[f"receipts_date_{row}"]]
        assert len(shown) == CASH_BOOK_ROWS
        assert "receipts_date_13" not in inputs
        assert inputs["receipts_total_cash"] == "1,500.00"
        assert inputs["payments_total_bank"] == "150.00"
        assert inputs["payments_date_4"] == ""

    def test_truncation_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="bizdoc.cash_book"):
            build_cash_book(receipts(14), [], CashBookMeta())
        assert "2 receipt(s)" in caplog.text

    def test_no_warning_when_everything_fits(self, caplog):
        with caplog.at_level(logging.WARNING, logger="bizdoc.cash_book"):
            build_cash_book(receipts(12), receipts(12), CashBookMeta())
        assert caplog.records == []

    def test_report_details(self):
        meta = CashBookMeta(company_name="ACME", company_tel="0700", report_date="01 Feb 2025",
                            period="", report_no="", prepared_by="Jane")
        inputs = build_cash_book([], [], meta)[0]
        assert inputs["company_name"] == "ACME"
        assert inputs["company_tel"] == "Tel: 0700"
        assert inputs["report_title"] == "CASH BOOK"
        assert inputs["report_period_value"] == "N/A"
        assert inputs["report_no_value"] == "CB-001"
        assert inputs["prepared_by"] == "Prepared By: Jane"
        assert inputs["approved_by"] == "Approved By:"
        assert inputs["page_number"] == "Page 1 of 1"

    def test_inputs_match_template(self):
        template = cash_book_template()
        inputs = build_cash_book(receipts(3), receipts(20), CashBookMeta())
        assert len(template) == 1
        assert {element.name for element in template[0]} == set(inputs[0])

    def test_side_columns(self):
        elements = {element.name: element for element in cash_book_template()[0]}
        assert elements["receipts_date_1"].x == 10
        assert elements["payments_date_1"].x == 105
        assert elements["receipts_date_1"].y == 100
        assert elements["receipts_date_12"].y == pytest.approx(100 + 11 * 6)
        assert elements["receipts_total_cash"].y == 180


class TestHelpers:
    def test_transaction_value(self):
        txns = receipts(1)
        assert transaction_value(txns, 0, "ref") == "RC1"
        assert transaction_value(txns, 5, "ref") == ""

    def test_column_totals(self):
        totals = column_totals(receipts(20, cash=10, bank=2.5))
        assert totals == {"cash": 200.0, "bank": 50.0, "discount": 0.0}

    def test_truncated_rows(self):
        assert truncated_rows(receipts(13), receipts(2)) == (1, 0)

    def test_from_dict(self):
        txn = CashBookTxn.from_dict({"date": "03/01", "cash": "1,200.50", "bank": None})
        assert txn == CashBookTxn(date="03/01", cash=1200.5)


class TestCashBookMeta:
    def test_from_dict(self):
        meta = CashBookMeta.from_dict({"company_name": "ACME", "report_no": 7, "period": None})
        assert meta.company_name == "ACME"
        assert meta.report_no == "7"
        assert meta.period == ""

    def test_unknown_keys_named(self):
        with pytest.raises(ValueError, match="tel"):
            CashBookMeta.from_dict({"tel": "0700"})

    def test_not_a_mapping(self):
        with pytest.raises(ValueError):
            CashBookMeta.from_dict(["ACME"])

    def test_transaction_not_a_mapping(self):
        with pytest.raises(ValueError):
            CashBookTxn.from_dict("02/01 Jane 500")
