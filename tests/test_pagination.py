import pytest

from app.campushub.pagination import Page, _escape_like, parse_page_args


@pytest.mark.parametrize(
    "count,limit,pages",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 3, 9)],
)
def test_pages_is_ceiling(count, limit, pages):
    assert Page(items=[], page=1, limit=limit, count=count).pages == pages


def test_parse_page_args_defaults_and_clamping():
    assert parse_page_args({}) == (1, 10)
    assert parse_page_args({"page": "3", "limit": "25"}) == (3, 25)
    assert parse_page_args({"page": "0", "limit": "0"}) == (1, 1)
    assert parse_page_args({"page": "abc", "limit": "5000"}) == (1, 100)
    assert parse_page_args({}, default_limit=5) == (1, 5)


def test_like_wildcards_are_escaped():
    assert _escape_like("50%_off") == "50\\%\\_off"


def test_page_beyond_range_is_empty(client, admin_headers):
    for i in range(3):
        r = client.post("/api/notices", headers=admin_headers, json={"title": f"Notice {i}", "description": "d"})
        assert r.status_code == 201

    r = client.get("/api/notices?page=2&limit=2")
    assert len(r.json["data"]["notices"]) == 1
    assert r.json["data"]["pagination"] == {"current": 2, "total": 2, "count": 3}

    r = client.get("/api/notices?page=9&limit=2")
    assert r.status_code == 200
    assert r.json["data"]["notices"] == []
    assert r.json["data"]["pagination"] == {"current": 9, "total": 2, "count": 3}


def test_search_treats_percent_literally(client, admin_headers):
    client.post("/api/notices", headers=admin_headers, json={"title": "Sale 50% off", "description": "books"})
    client.post("/api/notices", headers=admin_headers, json={"title": "Sale 500 off", "description": "pens"})

    r = client.get("/api/notices", query_string={"search": "50%"})
    assert [n["title"] for n in r.json["data"]["notices"]] == ["Sale 50% off"]


def test_huge_page_is_empty_not_an_error(client, admin_headers):
    client.post("/api/notices", headers=admin_headers, json={"title": "Only one", "description": "d"})

    r = client.get("/api/notices?page=99999999999999999999")
    assert r.status_code == 200
    assert r.json["data"]["notices"] == []
    assert r.json["data"]["pagination"] == {"current": 99999999999999999999, "total": 1, "count": 1}
