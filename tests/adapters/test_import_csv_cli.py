"""Tests for the import_csv_cli adapter."""

from unittest.mock import MagicMock

from sqlalchemy import create_engine

from datasheet_finance.adapters import import_csv_cli
from datasheet_finance.infrastructure import settings as settings_module
from datasheet_finance.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from datasheet_finance.infrastructure.record_store import SqlAlchemyRecordStore


def test_infer_field_type_from_names() -> None:
    """Column names imply currency, date and checkbox fields."""
    assert import_csv_cli.infer_field_type("Amount") == "Currency"
    assert import_csv_cli.infer_field_type("Booking date") == "DateTime"
    assert import_csv_cli.infer_field_type("Reconciled") == "Checkbox"
    assert import_csv_cli.infer_field_type("Merchant") == "SingleText"


def test_build_record_values_skips_blank_cells() -> None:
    """Blank cells are omitted and checkboxes become booleans."""
    fields = import_csv_cli.build_fields(["Title", "Amount", "Reconciled"])

    values = import_csv_cli.build_record_values(
        {"Title": " Rent ", "Amount": "", "Reconciled": "yes"},
        fields,
    )

    assert [field.field_id for field in fields] == ["fld1", "fld2", "fld3"]
    assert values == {"fld1": "Rent", "fld3": True}


def test_main_warns_without_file(monkeypatch):
    """A missing IMPORT_CSV_FILE only logs a warning."""
    fake_logger = MagicMock()
    monkeypatch.setattr(import_csv_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.delenv("IMPORT_CSV_FILE", raising=False)

    import_csv_cli.main()

    fake_logger.warning.assert_called_once()


def test_main_logs_missing_path(monkeypatch, tmp_path):
    """A path that does not exist is logged as an error."""
    fake_logger = MagicMock()
    monkeypatch.setattr(import_csv_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setenv("IMPORT_CSV_FILE", str(tmp_path / "missing.csv"))

    import_csv_cli.main()

    fake_logger.error.assert_called_once()


def test_main_imports_rows(monkeypatch, tmp_path, capsys):
    """Rows should land in the configured view with header fields."""
    csv_path = tmp_path / "transactions.csv"
    csv_path.write_text(
        "Title,Type,Amount,Products,Reconciled\n"
        "Grocery Run,Expense,90,\"Milk, Bread\",\n"
        "Salary,Revenue,1000,,true\n",
        encoding="utf-8",
    )
    engine = create_engine(f"sqlite:///{tmp_path / 'import.db'}")
    adapter = SqlAlchemyDatabaseEngineAdapter(engine=engine)
    fake_logger = MagicMock()
    monkeypatch.setattr(import_csv_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(
        import_csv_cli,
        "build_database_adapter",
        lambda: adapter,
    )
    monkeypatch.setenv("IMPORT_CSV_FILE", str(csv_path))
    monkeypatch.setenv("DATASHEET_VIEW_ID", "viwImport")

    import_csv_cli.main()

    store = SqlAlchemyRecordStore(
        adapter,
        view_id="viwImport",
        logger=fake_logger,
    )
    fields = store.fetch_fields()
    records = store.fetch_records()
    assert [field.name for field in fields] == [
        "Title",
        "Type",
        "Amount",
        "Products",
        "Reconciled",
    ]
    assert [record.title for record in records] == ["Grocery Run", "Salary"]
    assert records[0].values["fld4"] == "Milk, Bread"
    assert records[0].values["fld5"] is False
    assert records[1].values["fld5"] is True
    assert "Imported 2 records with 5 fields into view viwImport." in (
        capsys.readouterr().out
    )
    engine.dispose()
