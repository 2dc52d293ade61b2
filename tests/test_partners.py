def partner_payload(**overrides):
    data = {
        "name": "GamingGear",
        "type": "sponsor",
        "tier": "Gold",
        "website": "https://gaminggear.example",
        "description": "Peripherals maker",
    }
    data.update(overrides)
    return data


def test_partners_filtered_and_sorted_by_name(client, admin_headers):
    client.post("/api/partners", json=partner_payload(name="Zeta"), headers=admin_headers)
    client.post("/api/partners", json=partner_payload(name="Alpha", type="partner"), headers=admin_headers)
    client.post("/api/partners", json=partner_payload(name="Mid", active=False), headers=admin_headers)

    assert [p["name"] for p in client.get("/api/partners").json()] == ["Alpha", "Mid", "Zeta"]
    assert [p["name"] for p in client.get("/api/partners?type=sponsor&active=true").json()] == ["Zeta"]


def test_update_partner(client, admin_headers):
    partner = client.post("/api/partners", json=partner_payload(), headers=admin_headers).json()

    response = client.put(f"/api/partners/{partner['id']}", json={"tier": "Platinum"}, headers=admin_headers)
    assert response.json()["tier"] == "Platinum"
    assert client.get(f"/api/partners/{partner['id']}").json()["tier"] == "Platinum"


def test_delete_partner_removes_stored_logo(client, admin_headers, upload_store):
    files = {"image": ("logo.png", b"png-bytes", "image/png")}
    logo = client.post("/api/partners/upload", files=files, headers=admin_headers).json()["image_path"]
    assert logo.startswith("partners/")
    partner = client.post("/api/partners", json=partner_payload(logo=logo), headers=admin_headers).json()

    response = client.delete(f"/api/partners/{partner['id']}", headers=admin_headers)

    assert response.json() == {"message": "Partner removed"}
    assert not (upload_store.root / logo).exists()


def test_delete_partner_with_external_logo(client, admin_headers):
    partner = client.post(
        "/api/partners", json=partner_payload(logo="https://cdn.example/logo.png"), headers=admin_headers
    ).json()
    assert client.delete(f"/api/partners/{partner['id']}", headers=admin_headers).status_code == 200
