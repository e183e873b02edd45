"""
Tests for health endpoint
"""


def test_health_check(client):
    """Test GET /health"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_health_does_not_call_upstream(client, upstream):
    client.get("/health")
    assert upstream.requests == []
