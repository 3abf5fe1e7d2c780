import pandas as pd
import pytest

from ticker_core.portfolio.data_loader import load_holdings_table, stocks_from_frame
from ticker_core.portfolio.validation import validate_holdings_frame


def test_load_holdings_table_rejects_non_csv(tmp_path) -> None:
    with pytest.raises(ValueError):
        load_holdings_table(str(tmp_path / "holdings.xlsx"))


def test_load_holdings_table_and_convert(tmp_path) -> None:
    path = tmp_path / "holdings.csv"
    path.write_text("Symbol,Name,Quantity,Purchase_Price,Hidden\naapl,Apple,10,150,\nMSFT,,,,true\n")
    frame = load_holdings_table(str(path))
    assert not validate_holdings_frame(frame)
    stocks = stocks_from_frame(frame)
    assert stocks[0].symbol == "AAPL"
    assert stocks[0].name == "Apple"
    assert stocks[0].quantity == 10.0
    assert stocks[0].purchase_price == 150.0
    assert stocks[0].hidden is False
    assert stocks[1].name is None
    assert stocks[1].quantity is None
    assert stocks[1].hidden is True


def test_validation_reports_missing_symbol_column() -> None:
    issues = validate_holdings_frame(pd.DataFrame([{"Quantity": 1}]))
    assert [issue.code for issue in issues] == ["missing_column"]


def test_validation_flags_bad_rows() -> None:
    frame = pd.DataFrame(
        [
            {"Symbol": "AAPL", "Quantity": -1, "Purchase_Price": 100.0},
            {"Symbol": "aapl", "Quantity": 1, "Purchase_Price": "abc"},
            {"Symbol": None, "Quantity": 1, "Purchase_Price": 1.0},
        ]
    )
    codes = {issue.code for issue in validate_holdings_frame(frame)}
    assert codes == {"invalid_quantity", "duplicate_symbol", "invalid_purchase_price", "missing_symbol"}
