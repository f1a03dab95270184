import io

import pytest
from openpyxl import Workbook

from core.csv_export import export_entity
from core.exceptions import ImportFileError
from core.importer import import_file, read_rows


def _csv(*lines):
    return ("\n".join(lines) + "\n").encode("utf-8")


def test_imports_valid_rows(store):
    content = _csv(
        "name,description,type,base_uom,is_active",
        "BBL,Barrel,volume,158.987,true",
        "MT,Metric tonne,mass,1000,",
    )

    result = import_file(store, "uoms", "uoms.csv", content)

    assert result.summary.model_dump() == {"total": 2, "successful": 2, "failed": 0}
    assert [r.row for r in result.successful] == [2, 3]
    assert result.successful[0].data["base_uom"] == 158.987
    assert [u.name for u in store.list_uoms()] == ["BBL", "MT"]
    assert store.list_uoms()[1].is_active is True


def test_bad_rows_do_not_abort_the_batch(store):
    content = _csv(
        "name,type,contact_info,credit_status,is_active",
        "Northwind,supplier,,approved,true",
        ",customer,,pending,true",
        "Harbor,customer,,maybe,true",
        "Atlas,broker,,,no",
    )

    result = import_file(store, "counter_parties", "cp.csv", content)

    assert result.summary.model_dump() == {"total": 4, "successful": 2, "failed": 2}
    assert [r.row for r in result.failed] == [3, 4]
    assert [e.field for e in result.errors] == ["name", "credit_status"]
    assert result.errors[1].value == "maybe"
    assert result.failed[0].data == {"type": "customer", "credit_status": "pending", "is_active": "true"}
    assert [cp.name for cp in store.list_counter_parties()] == ["Northwind", "Atlas"]
    assert store.list_counter_parties()[1].is_active is False


def test_blend_components_need_existing_blend_and_commodity(store, catalog):
    blend = store.create_blend({"name": "E10"})
    content = _csv(
        "blend_id,component_commodity_id,percentage,is_active",
        f"{blend.id},{catalog['gasoline'].id},90,true",
        f"99,{catalog['ethanol'].id},10,true",
        f"{blend.id},77,10,true",
        f"{blend.id},{catalog['ethanol'].id},150,true",
        f"{blend.id},{catalog['ethanol'].id},10,true",
    )

    result = import_file(store, "blend_components", "components.csv", content)

    assert [r.row for r in result.successful] == [2, 6]
    assert [(e.row, e.field) for e in result.errors] == [
        (3, "blend_id"),
        (4, "component_commodity_id"),
        (5, "percentage"),
    ]
    assert result.errors[0].message == "Blend 99 not found"
    assert result.failed[0].error == "blend_id: Blend 99 not found"
    assert store.validate_blend_proportion(blend.id).valid is True
    assert store.list_blend_components()[0].commodity.name == "Gasoline"


def test_unknown_and_id_columns_are_ignored(store):
    content = _csv("id,name,colour", "17,BBL,blue")

    result = import_file(store, "uoms", "uoms.csv", content)

    assert result.summary.successful == 1
    assert store.list_uoms()[0].id == 1


def test_blank_rows_are_skipped(store):
    content = _csv("name,location_type", "Tank 1,storage", "", ",", "Tank 2,storage")

    result = import_file(store, "locations", "locations.csv", content)

    assert result.summary.total == 2
    assert [r.row for r in result.successful] == [2, 5]


def test_export_reimports(store):
    store.create_counter_party({"name": "Acme", "contact_info": "Bob, Inc.", "credit_status": "rejected"})
    store.create_counter_party({"name": "Globex", "is_active": False})
    exported = export_entity(store.list_counter_parties(), "counter_parties").encode("utf-8")

    target = type(store)()
    result = import_file(target, "counter_parties", "export.csv", exported)

    assert result.summary.failed == 0
    copied = target.list_counter_parties()
    assert [(c.name, c.contact_info, c.credit_status, c.is_active) for c in copied] == [
        ("Acme", "Bob, Inc.", "rejected", True),
        ("Globex", None, None, False),
    ]


def test_xlsx_upload(store, catalog):
    wb = Workbook()
    ws = wb.active
    ws.append(["commodity_id", "location_id", "capacity_type", "quantity", "start_date", "end_date", "is_active"])
    ws.append([catalog["gasoline"].id, catalog["terminal"].id, "storage", 5000, "2024-01-01", "2024-12-31", True])
    ws.append([catalog["gasoline"].id, 42, "storage", 10, None, None, None])
    buf = io.BytesIO()
    wb.save(buf)

    result = import_file(store, "capacity", "capacity.xlsx", buf.getvalue())

    assert result.summary.successful == 1
    assert result.errors[0].field == "location_id"
    capacity = store.list_capacity()[0]
    assert capacity.quantity == 5000
    assert capacity.end_date.isoformat() == "2024-12-31"
    assert capacity.location.name == "Gulf Terminal"


def test_bom_is_tolerated():
    rows = read_rows("uoms.csv", "\ufeffname,type\nBBL,volume\n".encode("utf-8"))

    assert rows == [(2, {"name": "BBL", "type": "volume"})]


@pytest.mark.parametrize("filename,content", [
    ("uoms.xls", b"anything"),
    ("uoms.xlsx", b"not a zip"),
    ("uoms.csv", b"\xff\xfe\x00broken"),
    ("uoms.csv", b""),
    ("uoms.csv", b"name,description\nBBL," + b"x" * 200000 + b"\n"),
])
def test_unreadable_files(filename, content):
    with pytest.raises(ImportFileError):
        read_rows(filename, content)
