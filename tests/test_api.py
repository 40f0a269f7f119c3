from datetime import datetime, timedelta, timezone

from salesboard.core.config import settings
from salesboard.db.session import Base
from salesboard.models import Sale

API = settings.api_prefix


def test_create_sale_then_list_today(client):
    response = client.post(
        f"{API}/sales",
        json={"amount": 1500, "seller_id": "v1", "team_id": "eq1", "description": "Venda teste"},
    )
    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"id", "message"}

    day = client.get(f"{API}/sales/day").json()
    assert set(day) == {"vendas", "total", "quantidade"}
    assert day["total"] >= 1500
    assert day["quantidade"] >= 1
    item = next(sale for sale in day["vendas"] if sale["id"] == body["id"])
    assert item["valor"] == 1500
    assert item["vendedor_nome"] == "João Silva"
    assert item["equipe_nome"] == "Equipe Norte"
    assert item["descricao"] == "Venda teste"


def test_create_sale_accepts_portuguese_field_names(client):
    response = client.post(
        f"{API}/sales", json={"valor": 900, "vendedor_id": "v2", "equipe_id": "eq1"}
    )
    assert response.status_code == 201


def test_create_sale_missing_amount_is_400(client):
    response = client.post(f"{API}/sales", json={"seller_id": "v1", "team_id": "eq1"})
    assert response.status_code == 400
    assert "error" in response.json()
    assert client.get(f"{API}/sales/by-team").json()[0]["quantidade_vendas"] == 0


def test_create_sale_with_bad_amount_is_400(client):
    response = client.post(
        f"{API}/sales", json={"amount": "abc", "seller_id": "v1", "team_id": "eq1"}
    )
    assert response.status_code == 400


def test_period_listings_share_shape(client):
    for path in ("/sales/week", "/sales/fortnight"):
        response = client.get(f"{API}{path}")
        assert response.status_code == 200
        assert response.json() == {"vendas": [], "total": 0, "quantidade": 0}


def test_projection_payloads(client):
    client.post(f"{API}/sales", json={"amount": 300, "seller_id": "v3", "team_id": "eq2"})

    fortnight = client.get(f"{API}/projections/fortnight").json()
    assert set(fortnight) == {"mediaDiaria", "projecaoQuinzena", "vendasAtuais"}
    assert fortnight["projecaoQuinzena"] == fortnight["vendasAtuais"] == 300
    assert fortnight["mediaDiaria"] == 20

    month = client.get(f"{API}/projections/month").json()
    assert set(month) == {"mediaDiaria", "projecaoMes", "vendasAtuais", "diasPassados", "diasNoMes"}
    assert month["vendasAtuais"] == 300
    assert 1 <= month["diasPassados"] <= month["diasNoMes"]


def test_sales_by_team_and_seller(client):
    client.post(f"{API}/sales", json={"amount": 700, "seller_id": "v5", "team_id": "eq3"})

    teams = client.get(f"{API}/sales/by-team", params={"period": "week"}).json()
    assert [row["id"] for row in teams][0] == "eq3"
    assert len(teams) == 3
    assert teams[0] == {
        "id": "eq3",
        "equipe_nome": "Equipe Leste",
        "quantidade_vendas": 1,
        "total_vendas": 700,
        "media_venda": 700,
    }
    assert teams[-1]["media_venda"] == 0

    sellers = client.get(f"{API}/sales/by-seller", params={"period": "dia"}).json()
    assert len(sellers) == 5
    assert sellers[0]["vendedor_nome"] == "Carlos Lima"
    assert sellers[0]["equipe_nome"] == "Equipe Leste"


def test_unknown_period_is_400(client):
    response = client.get(f"{API}/sales/by-seller", params={"period": "ano"})
    assert response.status_code == 400
    assert "ano" in response.json()["error"]


def test_teams_and_sellers_listing(client):
    teams = client.get(f"{API}/teams").json()
    assert teams == [
        {"id": "eq3", "nome": "Equipe Leste"},
        {"id": "eq1", "nome": "Equipe Norte"},
        {"id": "eq2", "nome": "Equipe Sul"},
    ]
    sellers = client.get(f"{API}/sellers").json()
    assert sellers[0] == {
        "id": "v4",
        "nome": "Ana Oliveira",
        "equipe_id": "eq2",
        "equipe_nome": "Equipe Sul",
    }


def test_seed_endpoint(client):
    response = client.post(f"{API}/seed")
    assert response.status_code == 200
    assert response.json()["vendas"] == 8
    totals = client.get(f"{API}/sales/by-team").json()
    assert sum(row["quantidade_vendas"] for row in totals) == 8


def test_health(client):
    body = client.get(f"{API}/health").json()
    assert body["status"] == "ok"


def test_amount_too_large_for_the_column_is_400(client):
    response = client.post(
        f"{API}/sales", json={"amount": "1e400", "seller_id": "v1", "team_id": "eq1"}
    )
    assert response.status_code == 400
    assert "error" in response.json()

    teams = client.get(f"{API}/sales/by-team").json()
    assert all(row["total_vendas"] == 0 for row in teams)
    month = client.get(f"{API}/projections/month").json()
    assert month["vendasAtuais"] == 0


def test_store_failure_is_500_with_message(client, engine):
    Base.metadata.drop_all(bind=engine)

    for path in ("/teams", "/sales/day"):
        response = client.get(f"{API}{path}")
        assert response.status_code == 500
        assert "no such table" in response.json()["error"]


def test_sale_with_offset_timestamp_is_stored_in_local_time(client, session):
    response = client.post(
        f"{API}/sales",
        json={
            "amount": 60,
            "seller_id": "v2",
            "team_id": "eq1",
            "occurred_at": "2026-10-19T23:30:00-12:00",
        },
    )
    assert response.status_code == 201

    sale = session.get(Sale, response.json()["id"])
    aware = datetime(2026, 10, 19, 23, 30, tzinfo=timezone(timedelta(hours=-12)))
    assert sale.occurred_at == aware.astimezone().replace(tzinfo=None)
