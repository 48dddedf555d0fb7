from equipcare.models import Contract, ServiceRecord


def create_customer(client, company="Northwind Foods", contact="Sam Ortiz"):
    response = client.post("/customers", json={"company": company, "contactPerson": contact})
    assert response.status_code == 200, response.text
    return response.json()


def create_contract(client, customer_id, **overrides):
    payload = {
        "customerId": customer_id,
        "equipmentType": "Refrigerant Dryer",
        "brand": "Hitachi",
        "contractType": "Quarterly Service",
        "contractPeriod": 12,
        "contractStartDate": "2024-01-15",
    }
    payload.update(overrides)
    response = client.post("/contracts", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


class TestCustomers:
    def test_create_and_list_with_contract_counts(self, client):
        northwind = create_customer(client)
        create_customer(client, company="Bluebird Labs", contact="Ana Ruiz")
        create_contract(client, northwind["id"])
        create_contract(client, northwind["id"], equipmentType="Compressor")

        response = client.get("/customers")

        assert response.status_code == 200
        body = response.json()
        assert [c["company"] for c in body] == ["Bluebird Labs", "Northwind Foods"]
        assert [c["contractCount"] for c in body] == [0, 2]

    def test_company_is_required(self, client):
        response = client.post("/customers", json={"company": "   ", "contactPerson": "Sam"})
        assert response.status_code == 422

    def test_update_customer(self, client):
        customer = create_customer(client)

        response = client.patch(
            f"/customers/{customer['id']}", json={"email": "ops@northwind.example"}
        )

        assert response.status_code == 200
        assert response.json()["email"] == "ops@northwind.example"
        assert response.json()["company"] == "Northwind Foods"

    def test_missing_customer(self, client):
        assert client.get("/customers/404").status_code == 404

    def test_delete_customer_cascades_to_contracts_and_records(self, client, db):
        customer = create_customer(client)
        contract = create_contract(client, customer["id"])
        client.put(f"/contracts/{contract['id']}/schedule/2024/1/completion", json={"completed": True})

        response = client.delete(f"/customers/{customer['id']}")

        assert response.status_code == 200
        db.expire_all()
        assert db.query(Contract).count() == 0
        assert db.query(ServiceRecord).count() == 0


class TestContracts:
    def test_create_derives_end_date(self, client):
        customer = create_customer(client)

        contract = create_contract(client, customer["id"], contractStartDate="2024-01-31", contractPeriod=13)

        assert contract["contractEndDate"] == "2025-02-28"
        assert contract["customerName"] == "Northwind Foods"
        assert contract["regeneration"] is None

    def test_create_without_start_date_has_no_end_date(self, client):
        customer = create_customer(client)
        contract = create_contract(client, customer["id"], contractStartDate=None)
        assert contract["contractEndDate"] is None

    def test_create_does_not_store_service_records(self, client, db):
        customer = create_customer(client)
        create_contract(client, customer["id"])
        assert db.query(ServiceRecord).count() == 0

    def test_missing_required_fields_are_rejected(self, client):
        customer = create_customer(client)
        response = client.post(
            "/contracts",
            json={"customerId": customer["id"], "equipmentType": "Compressor", "contractType": "Annual Service",
                  "contractPeriod": 12},
        )
        assert response.status_code == 422

    def test_non_positive_period_is_rejected(self, client):
        customer = create_customer(client)
        response = client.post(
            "/contracts",
            json={"customerId": customer["id"], "equipmentType": "Compressor", "brand": "Beko",
                  "contractType": "Annual Service", "contractPeriod": 0},
        )
        assert response.status_code == 422

    def test_unknown_customer(self, client):
        response = client.post(
            "/contracts",
            json={"customerId": 999, "equipmentType": "Compressor", "brand": "Beko",
                  "contractType": "Annual Service", "contractPeriod": 12},
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Customer not found"

    def test_options(self, client):
        body = client.get("/contracts/options").json()
        assert body["contractTypes"] == ["Quarterly Service", "Half-year Service", "Annual Service"]
        assert "Vacuum Pump" in body["equipmentTypes"]
        assert "Atlas Copco" in body["brands"]

    def test_list_filters_by_customer(self, client):
        first = create_customer(client)
        second = create_customer(client, company="Bluebird Labs")
        create_contract(client, first["id"])
        create_contract(client, second["id"])

        body = client.get("/contracts", params={"customer_id": second["id"]}).json()

        assert [c["customerName"] for c in body] == ["Bluebird Labs"]

    def test_terms_change_reports_regeneration(self, client):
        customer = create_customer(client)
        contract = create_contract(client, customer["id"])
        client.put(f"/contracts/{contract['id']}/schedule/2024/1/completion", json={"completed": True})

        response = client.patch(f"/contracts/{contract['id']}", json={"contractPeriod": 24})

        assert response.status_code == 200
        regeneration = response.json()["regeneration"]
        assert regeneration["deleteSucceeded"] is True
        assert regeneration["insertSucceeded"] is True
        assert regeneration["partial"] is False
        assert regeneration["deletedCount"] == 0
        assert regeneration["insertedCount"] == 8
        assert response.json()["contractEndDate"] == "2026-01-15"

    def test_delete_contract(self, client):
        customer = create_customer(client)
        contract = create_contract(client, customer["id"])

        assert client.delete(f"/contracts/{contract['id']}").status_code == 200
        assert client.get(f"/contracts/{contract['id']}").status_code == 404


class TestSchedule:
    def test_schedule_view(self, client):
        customer = create_customer(client)
        contract = create_contract(client, customer["id"])

        response = client.get(f"/contracts/{contract['id']}/schedule")

        assert response.status_code == 200
        body = response.json()
        assert body["customerName"] == "Northwind Foods"
        assert [s["periodLabel"] for s in body["services"]] == ["Q1 2024", "Q2 2024", "Q3 2024", "Q4 2024"]
        assert [s["dueDate"] for s in body["services"]] == [
            "2024-01-15",
            "2024-04-15",
            "2024-07-15",
            "2024-10-15",
        ]
        # today is 2024-08-01
        assert [s["isOverdue"] for s in body["services"]] == [True, True, True, False]
        assert body["summary"] == {"total": 4, "completed": 0, "pending": 4, "overdue": 3}

    def test_toggle_completion(self, client, db):
        customer = create_customer(client)
        contract = create_contract(client, customer["id"])
        url = f"/contracts/{contract['id']}/schedule/2024/2/completion"

        done = client.put(url, json={"completed": True}).json()
        assert done["completed"] is True
        assert done["completedDate"] == "2024-08-01"
        assert done["isOverdue"] is False
        assert done["materialized"] is True

        undone = client.put(url, json={"completed": False}).json()
        assert undone["completedDate"] is None
        assert undone["isOverdue"] is True
        assert undone["recordId"] == done["recordId"]
        assert db.query(ServiceRecord).count() == 1

        summary = client.get(f"/contracts/{contract['id']}/schedule").json()["summary"]
        assert summary["completed"] == 0

    def test_toggle_slot_outside_schedule(self, client):
        customer = create_customer(client)
        contract = create_contract(client, customer["id"])

        response = client.put(
            f"/contracts/{contract['id']}/schedule/2030/1/completion", json={"completed": True}
        )

        assert response.status_code == 404

    def test_period_number_out_of_range(self, client):
        customer = create_customer(client)
        contract = create_contract(client, customer["id"])

        response = client.put(
            f"/contracts/{contract['id']}/schedule/2024/5/completion", json={"completed": True}
        )

        assert response.status_code == 422

    def test_notes(self, client):
        customer = create_customer(client)
        contract = create_contract(client, customer["id"])
        base = f"/contracts/{contract['id']}/schedule/2024/3"

        unsaved = client.put(f"{base}/notes", json={"notes": "Bring spare filters"}).json()
        assert unsaved["notes"] == "Bring spare filters"
        assert unsaved["materialized"] is False

        client.put(f"{base}/completion", json={"completed": True})
        saved = client.put(f"{base}/notes", json={"notes": "Bring spare filters"}).json()
        assert saved["materialized"] is True

        services = client.get(f"/contracts/{contract['id']}/schedule").json()["services"]
        assert services[2]["notes"] == "Bring spare filters"
        assert services[2]["completed"] is True

    def test_missing_contract(self, client):
        assert client.get("/contracts/12345/schedule").status_code == 404
