from sqlmodel import Session, create_engine

from app import app, get_store
from store import RecordStore


def create_production(client, name="Spring Editorial"):
    response = client.post("/productions", json={"name": name})
    assert response.status_code == 200
    return response.json()


def append_look(client, production_id, name):
    response = client.post(f"/productions/{production_id}/looks", json={"name": name})
    assert response.status_code == 200
    return response.json()


def test_create_and_get_production(client):
    """Test successful production creation."""
    created = create_production(client)
    assert created["name"] == "Spring Editorial"
    assert created["shoot_date"] is None

    response = client.get(f"/productions/{created['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]

    response = client.get("/productions")
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [created["id"]]


def test_create_production_validation(client):
    response = client.post("/productions", json={"name": ""})
    assert response.status_code == 422

    response = client.post("/productions", json={"name": "   "})
    assert response.status_code == 400


def test_get_production_not_found(client):
    response = client.get("/productions/99999")
    assert response.status_code == 404


def test_typed_production_updates(client):
    production = create_production(client)
    pid = production["id"]

    response = client.patch(f"/productions/{pid}/location", json={"location_address": "221 Studio Lane"})
    assert response.status_code == 200
    assert response.json()["location_address"] == "221 Studio Lane"

    response = client.patch(f"/productions/{pid}/timing", json={"shoot_date": "2025-03-15", "call_time": "07:00"})
    assert response.status_code == 200
    assert response.json()["shoot_date"] == "2025-03-15"

    response = client.patch(f"/productions/{pid}/timing", json={"shoot_date": "March 15"})
    assert response.status_code == 422

    response = client.patch(f"/productions/{pid}/contact", json={"producer_name": "Dana Ruiz", "producer_phone": "555-0142"})
    assert response.status_code == 200
    assert response.json()["producer_phone"] == "555-0142"

    response = client.patch(f"/productions/{pid}/weather", json={"weather_city": "Lisbon", "weather_temp": "21°C"})
    assert response.status_code == 200
    assert response.json()["weather_temp"] == "21°C"

    response = client.patch(f"/productions/{pid}/notes", json={"special_notes": "Closed set"})
    assert response.status_code == 200
    body = response.json()
    assert body["special_notes"] == "Closed set"
    assert body["location_address"] == "221 Studio Lane"

    response = client.patch(f"/productions/{pid}/name", json={"name": "Resort 26"})
    assert response.status_code == 200
    assert response.json()["name"] == "Resort 26"


def test_refresh_weather(client):
    pid = create_production(client)["id"]

    response = client.post(f"/productions/{pid}/weather/refresh")
    assert response.status_code == 400

    client.patch(f"/productions/{pid}/weather", json={"weather_city": "Lisbon"})
    client.patch(f"/productions/{pid}/timing", json={"shoot_date": "2025-06-01"})

    response = client.post(f"/productions/{pid}/weather/refresh")
    assert response.status_code == 200
    assert response.json()["sunrise_time"] == "6:15AM"


def test_crew_endpoints(client):
    pid = create_production(client)["id"]

    response = client.post(f"/productions/{pid}/crew", json={"name": "Riley", "role": "Stylist"})
    assert response.status_code == 200
    response = client.post(
        f"/productions/{pid}/crew",
        json={"name": "Alex", "role": "Photographer", "phone": "555-0100", "call_time": "07:00"},
    )
    assert response.status_code == 200
    alex_id = response.json()["id"]

    response = client.post(f"/productions/{pid}/crew", json={"name": "Nobody", "role": ""})
    assert response.status_code == 400

    response = client.get(f"/productions/{pid}/crew")
    assert response.status_code == 200
    assert [m["role"] for m in response.json()] == ["Photographer", "Stylist"]

    response = client.delete(f"/crew/{alex_id}")
    assert response.status_code == 200
    assert response.json()["ok"] is True

    response = client.delete(f"/crew/{alex_id}")
    assert response.status_code == 404


def test_look_lifecycle(client):
    pid = create_production(client)["id"]
    a = append_look(client, pid, "Look A")
    b = append_look(client, pid, "Look B")
    c = append_look(client, pid, "Look C")
    assert [a["sequence_order"], b["sequence_order"], c["sequence_order"]] == [0, 1, 2]

    response = client.put(f"/productions/{pid}/looks/order", json={"look_ids": [c["id"], a["id"], b["id"]]})
    assert response.status_code == 200
    assert [look["name"] for look in response.json()] == ["Look C", "Look A", "Look B"]

    response = client.get(f"/productions/{pid}/looks")
    assert [(look["name"], look["sequence_order"]) for look in response.json()] == [
        ("Look C", 0),
        ("Look A", 1),
        ("Look B", 2),
    ]

    response = client.patch(f"/looks/{a['id']}", json={"styling_notes": "Roll sleeves"})
    assert response.status_code == 200
    assert response.json()["styling_notes"] == "Roll sleeves"

    response = client.delete(f"/looks/{c['id']}")
    assert response.status_code == 200

    response = client.get(f"/productions/{pid}/looks")
    assert [(look["name"], look["sequence_order"]) for look in response.json()] == [("Look A", 0), ("Look B", 1)]


def test_append_look_validation(client):
    pid = create_production(client)["id"]

    response = client.post(f"/productions/{pid}/looks", json={"name": "  "})
    assert response.status_code == 400

    response = client.post("/productions/99999/looks", json={"name": "Orphan"})
    assert response.status_code == 404


def test_reorder_mismatch_leaves_order_unchanged(client):
    pid = create_production(client)["id"]
    a = append_look(client, pid, "Look A")
    b = append_look(client, pid, "Look B")

    response = client.put(f"/productions/{pid}/looks/order", json={"look_ids": [b["id"]]})
    assert response.status_code == 400

    response = client.put(f"/productions/{pid}/looks/order", json={"look_ids": [b["id"], a["id"], 99999]})
    assert response.status_code == 400

    response = client.get(f"/productions/{pid}/looks")
    assert [look["id"] for look in response.json()] == [a["id"], b["id"]]


def test_upload_look_image(client):
    pid = create_production(client)["id"]
    look = append_look(client, pid, "Look A")

    response = client.post(
        f"/looks/{look['id']}/image",
        files={"file": ("front.png", b"\x89PNG\r\n", "image/png")},
    )
    assert response.status_code == 200
    image_url = response.json()["image_url"]
    assert image_url.startswith(f"/uploads/production-images/looks/{look['id']}-")
    assert image_url.endswith(".png")

    response = client.get(image_url)
    assert response.status_code == 200
    assert response.content == b"\x89PNG\r\n"


def test_call_sheet_document(client):
    pid = create_production(client)["id"]
    append_look(client, pid, "Look A")
    append_look(client, pid, "Look B")

    response = client.get(f"/productions/{pid}/call-sheet")
    assert response.status_code == 200
    doc = response.json()
    assert doc["header"] == {"title": "Spring Editorial", "date": "DATE"}
    assert len(doc["crew"]) == 6
    assert all(row["placeholder"] for row in doc["crew"])
    assert [line["text"] for line in doc["looks"]] == ["Look 1: Look A", "Look 2: Look B"]
    assert doc["location"]["address"] == "LOCATION ADDRESS"

    client.post(f"/productions/{pid}/crew", json={"name": "Alex", "role": "Photographer"})
    doc = client.get(f"/productions/{pid}/call-sheet").json()
    assert [row["name"] for row in doc["crew"]] == ["Alex"]


def test_call_sheet_html(client):
    pid = create_production(client)["id"]
    append_look(client, pid, "Casual Denim")

    response = client.get(f"/productions/{pid}/call-sheet.html")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Look 1: Casual Denim" in response.text

    response = client.get("/productions/99999/call-sheet.html")
    assert response.status_code == 404


def test_delete_production(client):
    pid = create_production(client)["id"]
    append_look(client, pid, "Look A")

    response = client.delete(f"/productions/{pid}")
    assert response.status_code == 200
    assert response.json()["ok"] is True

    response = client.get(f"/productions/{pid}")
    assert response.status_code == 404


def test_root_endpoint(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "docs" in data


def test_store_failure_returns_503(client, tmp_path):
    broken = create_engine(f"sqlite:///{tmp_path / 'missing' / 'callsheet.db'}")

    def get_broken_store():
        with Session(broken) as session:
            yield RecordStore(session)

    app.dependency_overrides[get_store] = get_broken_store

    response = client.get("/productions")
    assert response.status_code == 503
    assert response.json()["detail"] == "Storage temporarily unavailable, please retry"

    response = client.post("/productions", json={"name": "Spring Editorial"})
    assert response.status_code == 503
    assert "unavailable" in response.json()["detail"]
