"""
Tests for currency and exchange API endpoints.
"""

from decimal import Decimal


def create_currency(client, code, exchange):
    return client.post("/currencies", json={
        "code": code,
        "name": code.title(),
        "exchange": exchange,
        "created_by": "tester",
    })


class TestCurrencies:

    def test_create_currency_returns_201(self, client):
        response = create_currency(client, "GOLD", "0.01")
        assert response.status_code == 201
        assert Decimal(response.json()["exchange"]) == Decimal("0.01")

    def test_duplicate_returns_400(self, client):
        create_currency(client, "GOLD", "0.01")
        assert create_currency(client, "GOLD", "0.02").status_code == 400

    def test_zero_exchange_returns_422(self, client):
        assert create_currency(client, "GOLD", "0").status_code == 422

    def test_get_unknown_currency_returns_404(self, client):
        assert client.get("/currencies/COPPER").status_code == 404

    def test_update_and_list(self, client):
        create_currency(client, "GOLD", "0.01")
        create_currency(client, "PLATINUM", "0.001")
        response = client.patch("/currencies/GOLD", json={
            "exchange": "0.02", "updated_by": "bob",
        })
        assert response.status_code == 200
        codes = [c["code"] for c in client.get("/currencies").json()]
        assert codes == ["GOLD", "PLATINUM"]


class TestExchange:

    def _setup(self, client):
        create_currency(client, "GOLD", "0.01")
        create_currency(client, "PLATINUM", "0.001")

    def test_exchange_amount(self, client):
        self._setup(client)
        response = client.get("/exchange", params={
            "from_currency": "GOLD", "to_currency": "PLATINUM", "amount": "1000",
        })
        assert response.status_code == 200
        assert Decimal(response.json()["result"]) == Decimal("100")

    def test_rate(self, client):
        self._setup(client)
        response = client.get("/exchange/rate", params={
            "from_currency": "PLATINUM", "to_currency": "GOLD",
        })
        assert Decimal(response.json()["rate"]) == Decimal("10")

    def test_unknown_currency_returns_404(self, client):
        self._setup(client)
        response = client.get("/exchange/rate", params={
            "from_currency": "GOLD", "to_currency": "COPPER",
        })
        assert response.status_code == 404

    def test_denominator_roundtrip(self, client):
        response = client.put("/exchange/denominator", json={"value": "250"})
        assert response.status_code == 200
        data = client.get("/exchange/denominator").json()
        assert Decimal(data["value"]) == Decimal("250")

    def test_non_positive_denominator_returns_422(self, client):
        response = client.put("/exchange/denominator", json={"value": "0"})
        assert response.status_code == 422
