# Di dalam file: test_main.py

from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


class TestEndpoint:

    def test_root(self):
        response = client.get("/")
        assert response.status_code == 200
        assert "Kalkulator Faraidh" in response.json()["message"]

    def test_daftar_ahli_waris(self):
        response = client.get("/heirs/")
        assert response.status_code == 200
        heirs = {h["id"]: h for h in response.json()}
        assert len(heirs) == 21
        assert heirs["husband"]["blockable"] is False
        assert heirs["paternal_grandfather"]["blockable"] is True
        assert heirs["son"]["is_asaba"] is True

    def test_hitung(self):
        payload = {"heirs": {"husband": True, "sons": 1}, "tirkah": 1200}
        response = client.post("/calculate/", json=payload)
        assert response.status_code == 200
        body = response.json()
        shares = {e["category"]: e for e in body["entries"]}
        assert shares["husband"]["final_fraction"] == "1/4"
        assert shares["husband"]["amount"] == 300.0
        assert shares["son"]["final_fraction"] == "3/4"
        assert body["correction"]["kind"] == "none"
        assert body["unallocated"] == "0"

    def test_hitung_aul(self):
        payload = {"heirs": {"husband": True, "full_sisters": 2, "mother": True}, "tirkah": 800}
        body = client.post("/calculate/", json=payload).json()
        assert body["correction"]["kind"] == "awl"
        assert body["correction"]["ratio"] == "3/4"
        assert body["ashl_akhir"] == 8

    def test_validasi_422(self):
        response = client.post("/calculate/", json={"heirs": {"husband": True, "wife": True}, "tirkah": 100})
        assert response.status_code == 422
        response = client.post("/calculate/", json={"heirs": {"sons": 1}, "tirkah": -5})
        assert response.status_code == 422
        response = client.post("/calculate/", json={"heirs": {"cousins": 1}, "tirkah": 5})
        assert response.status_code == 422
