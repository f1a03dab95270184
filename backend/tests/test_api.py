def test_uom_crud_roundtrip(client):
    created = client.post("/uoms/", json={"name": "BBL", "type": "volume", "base_uom": 158.987})
    assert created.status_code == 201
    uom = created.json()
    assert uom["id"] == 1
    assert uom["is_active"] is True
    assert uom["created_at"]

    updated = client.patch(f"/uoms/{uom['id']}", json={"description": "Barrel"})
    assert updated.status_code == 200
    assert updated.json()["description"] == "Barrel"
    assert updated.json()["type"] == "volume"

    assert client.get("/uoms/").json()[0]["description"] == "Barrel"
    assert client.delete(f"/uoms/{uom['id']}").status_code == 204
    assert client.get(f"/uoms/{uom['id']}").status_code == 404


def test_create_requires_a_name(client):
    assert client.post("/commodities/", json={"name": "   "}).status_code == 422
    assert client.post("/commodities/", json={"density": 0.8}).status_code == 422


def test_update_cannot_blank_the_name(client):
    for path in ("/uoms/", "/commodities/", "/locations/", "/counter-parties/", "/blends/"):
        record = client.post(path, json={"name": "Original"}).json()

        assert client.patch(f"{path}{record['id']}", json={"name": "   "}).status_code == 422
        assert client.patch(f"{path}{record['id']}", json={"name": ""}).status_code == 422
        renamed = client.patch(f"{path}{record['id']}", json={"name": " Renamed "})
        assert renamed.json()["name"] == "Renamed"


def test_location_details(client):
    acme = client.post("/counter-parties/", json={"name": "Acme"}).json()
    location = client.post("/locations/", json={"name": "Tank 1", "counterparty_id": acme["id"]}).json()

    detail = client.get(f"/locations/{location['id']}/details")

    assert detail.status_code == 200
    assert detail.json()["location"]["name"] == "Tank 1"
    assert detail.json()["counterparty"]["name"] == "Acme"
    assert client.get("/locations/99/details").status_code == 404


def test_missing_records_are_404(client):
    assert client.get("/blends/3").status_code == 404
    response = client.patch("/capacity/3", json={"quantity": 10})
    assert response.status_code == 404
    assert response.json()["detail"] == "Capacity with id 3 not found"


def test_delete_twice_is_fine(client):
    location = client.post("/locations/", json={"name": "Tank 1"}).json()

    assert client.delete(f"/locations/{location['id']}").status_code == 204
    assert client.delete(f"/locations/{location['id']}").status_code == 204
    assert client.get("/locations/").json() == []


def test_commodity_embeds_uom(client):
    uom = client.post("/uoms/", json={"name": "BBL"}).json()
    commodity = client.post("/commodities/", json={"name": "Gasoline", "uom_id": uom["id"]}).json()

    assert commodity["uom"] == {"id": uom["id"], "name": "BBL"}

    stale = client.patch(f"/commodities/{commodity['id']}", json={"uom_id": 404}).json()
    assert stale["uom_id"] == 404
    assert stale["uom"]["name"] == "BBL"
    assert client.get(f"/commodities/{commodity['id']}/details").json()["uom"] is None


def test_blend_with_components_and_validation(client, catalog):
    payload = {
        "name": "E10",
        "commodity_id": catalog["gasoline"].id,
        "components": [
            {"component_commodity_id": catalog["gasoline"].id, "percentage": 60},
            {"component_commodity_id": catalog["ethanol"].id, "percentage": 30},
        ],
    }
    blend = client.post("/blends/with-components", json=payload)
    assert blend.status_code == 201
    blend_id = blend.json()["id"]
    assert "components" not in blend.json()

    result = client.get(f"/blends/{blend_id}/validate").json()
    assert result == {"valid": False, "total": 90, "message": "Total is 90%, should be 100%"}

    components = client.get("/blend-components/", params={"blend_id": blend_id}).json()
    assert [c["percentage"] for c in components] == [60, 30]
    assert components[0]["blend"]["name"] == "E10"

    client.patch(f"/blend-components/{components[1]['id']}", json={"percentage": 40})
    detail = client.get(f"/blends/{blend_id}/details").json()
    assert detail["proportion"]["valid"] is True
    assert [c["commodity"]["name"] for c in detail["components"]] == ["Gasoline", "Ethanol"]


def test_blend_with_unknown_component_commodity(client):
    payload = {"name": "Ghost", "components": [{"component_commodity_id": 9, "percentage": 100}]}

    assert client.post("/blends/with-components", json=payload).status_code == 404
    assert client.get("/blends/").json() == []


def test_deleting_blend_removes_components(client, catalog):
    payload = {
        "name": "B",
        "components": [{"component_commodity_id": catalog["diesel"].id, "percentage": 100}],
    }
    keep = client.post("/blends/with-components", json={**payload, "name": "A"}).json()
    drop = client.post("/blends/with-components", json=payload).json()

    client.delete(f"/blends/{drop['id']}")

    remaining = client.get("/blend-components/").json()
    assert [c["blend_id"] for c in remaining] == [keep["id"]]


def test_blend_component_references_are_checked(client, catalog):
    blend = client.post("/blends/", json={"name": "E10"}).json()

    missing_blend = client.post("/blend-components/", json={
        "blend_id": 50, "component_commodity_id": catalog["ethanol"].id, "percentage": 10,
    })
    assert missing_blend.status_code == 404
    out_of_range = client.post("/blend-components/", json={
        "blend_id": blend["id"], "component_commodity_id": catalog["ethanol"].id, "percentage": 150,
    })
    assert out_of_range.status_code == 422

    created = client.post("/blend-components/", json={
        "blend_id": blend["id"], "component_commodity_id": catalog["ethanol"].id, "percentage": 10,
    })
    assert created.status_code == 201
    assert created.json()["commodity"]["name"] == "Ethanol"


def test_capacity_endpoints(client, catalog):
    created = client.post("/capacity/", json={
        "commodity_id": catalog["gasoline"].id,
        "location_id": catalog["terminal"].id,
        "capacity_type": "storage",
        "quantity": 1000,
        "start_date": "2024-01-01",
        "end_date": "2024-12-31",
    }).json()
    assert created["location"]["name"] == "Gulf Terminal"
    assert created["start_date"] == "2024-01-01"

    assert client.post("/capacity/validate", json={"quantity": 5}).json() == {"valid": True, "errors": []}
    assert client.get(f"/capacity/{created['id']}/details").json()["commodity"]["name"] == "Gasoline"


def test_counter_party_credit_status(client):
    ok = client.post("/counter-parties/", json={"name": "Acme", "credit_status": "Approved"})
    assert ok.json()["credit_status"] == "approved"
    unset = client.post("/counter-parties/", json={"name": "Globex", "credit_status": ""})
    assert unset.json()["credit_status"] is None
    assert client.post("/counter-parties/", json={"name": "X", "credit_status": "vip"}).status_code == 422


def test_export_endpoint(client):
    client.post("/counter-parties/", json={"name": "Acme", "contact_info": "Bob, Inc."})

    response = client.get("/counter-parties/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="counter_parties.csv"' in response.headers["content-disposition"]
    assert response.text.splitlines()[1] == 'Acme,,"Bob, Inc.",,true'


def test_import_endpoint(client, store):
    content = b"name,location_type,address,counterparty_id,is_active\nTank 1,storage,,,\nTank 2,storage,,7,\n"

    response = client.post("/locations/import", files={"file": ("locations.csv", content, "text/csv")})

    assert response.status_code == 200
    body = response.json()
    assert body["summary"] == {"total": 2, "successful": 1, "failed": 1}
    assert body["errors"][0] == {
        "row": 3,
        "field": "counterparty_id",
        "message": "Counter party 7 not found",
        "value": "7",
    }
    assert [loc.name for loc in store.list_locations()] == ["Tank 1"]


def test_import_rejects_unreadable_file(client):
    response = client.post("/uoms/import", files={"file": ("uoms.xls", b"binary", "application/vnd.ms-excel")})

    assert response.status_code == 400


def test_import_rejects_oversized_csv_cell(client):
    content = b"name,description\nBBL," + b"x" * 200000 + b"\n"

    response = client.post("/uoms/import", files={"file": ("uoms.csv", content, "text/csv")})

    assert response.status_code == 400
    assert "malformed CSV" in response.json()["detail"]
    assert client.get("/uoms/").json() == []


def test_templates(client):
    response = client.get("/templates/blend_components")
    assert response.text.strip() == "blend_id,component_commodity_id,percentage,is_active"
    assert "blend_components_import_template.csv" in response.headers["content-disposition"]

    assert client.get("/templates/whatever").text.strip() == "column1,column2"


def test_dashboard_stats(client, catalog):
    stats = client.get("/dashboard/stats").json()

    assert stats["uoms"] == 2
    assert stats["commodities"] == 3
    assert stats["capacity"] == 0


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
