"""Tests for the advice and translation proxy endpoints."""

import requests

from conftest import USER, FakeResponse, auth_header

ADVICE = {"age": 30, "name": "Sam", "behavior": "skips breakfast"}


class TestGetAdvice:
    def test_proxies_payload_and_returns_response_verbatim(
        self, test_client, user_token, fake_services
    ):
        fake_services.response = FakeResponse({"advice": "Eat breakfast.", "score": 3})

        response = test_client.post(
            "/getAdvice", json=ADVICE, headers=auth_header(user_token)
        )

        assert response.status_code == 200
        assert response.json() == {"advice": "Eat breakfast.", "score": 3}
        [call] = fake_services.calls
        assert call["url"] == "https://advice.test/getAdvice"
        assert call["json"] == ADVICE
        assert call["timeout"] == 30

    def test_counts_request_with_payload_name(
        self, test_client, user_token, fake_services, fake_db
    ):
        test_client.post("/getAdvice", json=ADVICE, headers=auth_header(user_token))

        counter = fake_db["UserRequests"].find_one({"email": USER["email"]})
        assert counter["requestCount"] == 2
        assert counter["name"] == "Sam"

    def test_invalid_payload_is_not_forwarded_or_counted(
        self, test_client, user_token, fake_services, fake_db
    ):
        response = test_client.post(
            "/getAdvice",
            json={**ADVICE, "age": -2},
            headers=auth_header(user_token),
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Age must be a positive number."}
        assert fake_services.calls == []
        counter = fake_db["UserRequests"].find_one({"email": USER["email"]})
        assert counter["requestCount"] == 1

    def test_upstream_failure_is_generic_500(
        self, test_client, user_token, fake_services
    ):
        fake_services.response = FakeResponse({"detail": "model crashed"}, 502)

        response = test_client.post(
            "/getAdvice", json=ADVICE, headers=auth_header(user_token)
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Error retrieving advice"}

    def test_connection_error_is_generic_500(
        self, test_client, user_token, monkeypatch
    ):
        from app.services import inference_client

        def unreachable(*args, **kwargs):
            raise requests.ConnectionError("no route to host")

        monkeypatch.setattr(inference_client.requests, "post", unreachable)

        response = test_client.post(
            "/getAdvice", json=ADVICE, headers=auth_header(user_token)
        )
        assert response.status_code == 500
        assert response.json() == {"error": "Error retrieving advice"}


class TestTranslate:
    def test_proxies_text_and_language(self, test_client, user_token, fake_services):
        fake_services.response = FakeResponse({"translation": "bonjour"})

        response = test_client.post(
            "/translate",
            json={"text": "hello", "language": "fr"},
            headers=auth_header(user_token),
        )

        assert response.status_code == 200
        assert response.json() == {"translation": "bonjour"}
        [call] = fake_services.calls
        assert call["url"] == "https://translate.test/translate"
        assert call["json"] == {"text": "hello", "language": "fr"}

    def test_missing_fields_is_400(self, test_client, user_token, fake_services):
        response = test_client.post(
            "/translate", json={"text": "hello"}, headers=auth_header(user_token)
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Text and language are required."}
        assert fake_services.calls == []

    def test_upstream_failure_is_generic_500(
        self, test_client, user_token, fake_services
    ):
        fake_services.response = FakeResponse(None, 500)

        response = test_client.post(
            "/translate",
            json={"text": "hello", "language": "fr"},
            headers=auth_header(user_token),
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Error retrieving translation"}


def test_request_count_matches_counted_calls(test_client, user_token, fake_services):
    """Login, advice and translate each add exactly one to the counter."""
    headers = auth_header(user_token)
    for _ in range(3):
        test_client.post("/getAdvice", json=ADVICE, headers=headers)
    for _ in range(2):
        test_client.post(
            "/translate", json={"text": "hi", "language": "es"}, headers=headers
        )

    response = test_client.get("/requestCount", headers=headers)

    assert response.json() == {"requestCount": 6}
