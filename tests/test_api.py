from services.prakriti import QUESTIONS

PATIENT_FORM = {
    "name": "Meera Iyer",
    "email": "meera@example.com",
    "phone": "9000000001",
    "age": 29,
    "gender": "female",
    "weight": 55,
    "height": 160,
    "current_problems": ["Hypertension"],
    "allergies": [],
}


def _register(client, email, role="patient"):
    resp = client.post("/register", data={"email": email, "password": "secret123", "name": "Test", "role": role})
    assert resp.status_code == 200
    return resp.json()


def _new_patient(client, email="meera@example.com"):
    _register(client, email)
    resp = client.post("/api/patients", json=PATIENT_FORM)
    assert resp.status_code == 201
    return resp.json()["id"]


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_register_login_logout(client):
    _register(client, "user@example.com")
    assert client.post("/register", data={"email": "user@example.com", "password": "secret123"}).status_code == 409

    client.get("/logout")
    bad = client.post("/login", data={"email": "user@example.com", "password": "wrong-pass"})
    assert bad.status_code == 401

    ok = client.post("/login", data={"email": "USER@example.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["role"] == "patient"


def test_short_password_rejected(client):
    resp = client.post("/register", data={"email": "x@example.com", "password": "123"})
    assert resp.status_code == 422


def test_patient_data_requires_login(client):
    assert client.get("/api/patients/pat_missing").status_code == 401
    assert client.post("/api/recipes", json={}).status_code == 401


def test_patient_profile_with_metrics(client):
    patient_id = _new_patient(client)
    resp = client.get(f"/api/patients/{patient_id}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["patient"]["email"] == "meera@example.com"
    assert body["patient"]["medical_conditions"] == ["Hypertension"]
    assert body["metrics"]["bmi"] == 21.5
    assert body["diet_charts"] == []

    assert client.get("/api/patients/pat_missing").status_code == 404


def test_patients_cannot_see_each_other(client):
    patient_id = _new_patient(client)
    client.get("/logout")

    _register(client, "other@example.com")
    assert client.get(f"/api/patients/{patient_id}").status_code == 403
    client.get("/logout")

    _register(client, "doctor@example.com", role="doctor")
    assert client.get(f"/api/patients/{patient_id}").status_code == 200


def test_update_patient(client):
    patient_id = _new_patient(client)
    resp = client.patch(f"/api/patients/{patient_id}", json={"vikriti": "pitta", "season": "winter"})
    assert resp.status_code == 200
    assert resp.json()["vikriti"] == "pitta"
    assert client.get(f"/api/patients/{patient_id}").json()["patient"]["season"] == "winter"

    bad = client.patch(f"/api/patients/{patient_id}", json={"name": " "})
    assert bad.status_code == 422
    assert bad.json()["error"] == "invalid_registration"


def test_invalid_registration_form(client):
    _register(client, "someone@example.com")
    resp = client.post("/api/patients", json={**PATIENT_FORM, "phone": ""})
    assert resp.status_code == 422
    assert resp.json()["fields"] == ["phone"]


def test_foods(client):
    foods = client.get("/api/foods").json()
    assert foods["count"] >= 20
    spices = client.get("/api/foods", params={"q": "spices"}).json()["foods"]
    assert spices and all(f["category"] == "Spices" for f in spices)
    assert client.get("/api/foods/1").json()["name"] == "Basmati Rice"
    assert client.get("/api/foods/999").status_code == 404


def test_assessment_updates_prakriti(client):
    patient_id = _new_patient(client)
    questions = client.get("/api/prakriti/questions").json()["questions"]
    assert len(questions) == 10

    answers = {q.id: 1 for q in QUESTIONS}
    resp = client.post("/api/prakriti/assessment", json={"answers": answers, "patient_id": patient_id})
    assert resp.status_code == 200
    assert resp.json()["result"]["dominant"] == "pitta"
    assert client.get(f"/api/patients/{patient_id}").json()["patient"]["prakriti"] == "pitta"


def test_incomplete_assessment(client):
    resp = client.post("/api/prakriti/assessment", json={"answers": {"1": 0}})
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"] == "incomplete_answers"
    assert "2" in body["missing"]


def test_compatibility_ranking(client):
    patient_id = _new_patient(client)
    resp = client.get(f"/api/patients/{patient_id}/compatibility", params={"limit": 5})
    assert resp.status_code == 200
    results = resp.json()["results"]
    assert len(results) == 5
    scores = [r["score"] for r in results]
    assert scores == sorted(scores, reverse=True)
    assert all(r["level"] in {"excellent", "good", "moderate", "poor"} for r in results)


def test_diet_chart_falls_back_without_providers(client):
    patient_id = _new_patient(client)
    resp = client.post(f"/api/patients/{patient_id}/diet-charts", json={"duration": 3, "goals": ["better sleep"]})
    assert resp.status_code == 201
    chart = resp.json()
    assert chart["generated_by"] == "fallback"
    assert chart["title"] == "Personalized Diet Plan - 3 Days"

    stored = client.get(f"/api/diet-charts/{chart['id']}")
    assert stored.status_code == 200
    assert stored.json()["id"] == chart["id"]

    pdf = client.get(f"/api/diet-charts/{chart['id']}.pdf")
    assert pdf.status_code == 200
    assert pdf.headers["content-type"] == "application/pdf"
    assert pdf.content.startswith(b"%PDF")

    listed = client.get(f"/api/patients/{patient_id}").json()["diet_charts"]
    assert [c["id"] for c in listed] == [chart["id"]]

    assert client.get("/api/diet-charts/diet_0").status_code == 404


def test_symptom_tracking(client):
    patient_id = _new_patient(client)
    resp = client.post(
        f"/api/patients/{patient_id}/symptoms",
        json={"energy": 4, "stress_level": 2, "symptoms": [{"name": "Fatigue", "severity": 2}]},
    )
    assert resp.status_code == 201
    assert resp.json()["digestion"] == 3

    history = client.get(f"/api/patients/{patient_id}/symptoms").json()
    assert len(history["entries"]) == 1
    assert history["chart"][0]["stress"] == 4
    assert {p["subject"]: p["value"] for p in history["radar"]}["Energy"] == 4

    bad = client.post(f"/api/patients/{patient_id}/symptoms", json={"symptoms": [{"name": " "}]})
    assert bad.status_code == 422
    assert bad.json()["error"] == "invalid_symptom_entry"


def test_recipes(client):
    _register(client, "cook@example.com")
    draft = {
        "name": "Mung Soup",
        "ingredients": [{"food_id": "2", "quantity": 200}, {"food_id": "14", "quantity": 2}],
        "instructions": ["Boil dal", "Temper with cumin"],
        "servings": 2,
    }
    resp = client.post("/api/recipes", json=draft)
    assert resp.status_code == 201
    assert resp.json()["nutritional_info"]["calories"] == 109

    recipes = client.get("/api/recipes").json()["recipes"]
    assert [r["name"] for r in recipes] == ["Mung Soup"]

    bad = client.post("/api/recipes", json={**draft, "ingredients": [{"food_id": "404", "quantity": 1}]})
    assert bad.status_code == 422
    assert bad.json()["error"] == "invalid_recipe"
