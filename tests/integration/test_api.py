"""
Integration tests for the Flask API.
"""
import pytest

from furnilyzer import __version__
from furnilyzer.api import create_app


@pytest.fixture
def client(analyzer):
    app = create_app(analyzer=analyzer)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def unavailable_client():
    app = create_app(load_analyzer=False)
    app.config["TESTING"] = True
    return app.test_client()


class TestHealth:

    def test_health(self, client):
        """Should report status and version."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json() == {"status": "ok", "version": __version__}


class TestAnalyzeEndpoint:

    def test_analyze(self, client):
        """Should return the analysis of a query as JSON."""
        response = client.post("/api/analyze", json={"text": "bolzan armchir"})
        data = response.get_json()

        assert response.status_code == 200
        assert data["productType"] == "Armchair"
        assert data["brandName"] == "Bolzan"
        assert data["originalText"] == "bolzan armchir"
        assert 0.0 <= data["confidence"] <= 1.0

    def test_missing_text(self, client):
        """Should reject a body without text."""
        response = client.post("/api/analyze", json={})

        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_non_string_text(self, client):
        """Should reject text that is not a string."""
        response = client.post("/api/analyze", json={"text": 42})
        assert response.status_code == 400

    def test_no_json_body(self, client):
        """Should reject a request without a JSON body."""
        response = client.post("/api/analyze", data="text=sofa")
        assert response.status_code == 400

    def test_analyzer_unavailable(self, unavailable_client):
        """Should answer 503 when no analyzer is loaded."""
        response = unavailable_client.post("/api/analyze", json={"text": "sofa"})
        assert response.status_code == 503

    def test_analyzer_failure(self, client, analyzer, monkeypatch):
        """Should answer 500 with details when analysis fails."""
        def explode(text):
            raise RuntimeError("trie exploded")

        monkeypatch.setattr(analyzer, "analyze", explode)
        response = client.post("/api/analyze", json={"text": "sofa"})
        data = response.get_json()

        assert response.status_code == 500
        assert data["error"] == "Failed to analyze text"
        assert data["details"] == "trie exploded"


class TestBatchEndpoint:

    def test_batch(self, client):
        """Should analyze every text in order."""
        response = client.post("/api/analyze/batch", json={"texts": ["soafa", "elevated arms"]})
        data = response.get_json()

        assert response.status_code == 200
        assert [item["productType"] for item in data] == ["Sofa", None]
        assert data[1]["features"] == ["Elevated Arms"]

    def test_non_string_item_becomes_error_record(self, client):
        """Should turn a bad item into an error record and keep going."""
        response = client.post("/api/analyze/batch", json={"texts": ["sofa", 7]})
        data = response.get_json()

        assert response.status_code == 200
        assert data[0]["productType"] == "Sofa"
        assert data[1]["error"] == "Failed to analyze text"
        assert data[1]["text"] == 7

    def test_texts_must_be_a_list(self, client):
        """Should reject texts that are not a list."""
        response = client.post("/api/analyze/batch", json={"texts": "sofa"})
        assert response.status_code == 400

    def test_batch_analyzer_unavailable(self, unavailable_client):
        """Should answer 503 for batches when no analyzer is loaded."""
        response = unavailable_client.post("/api/analyze/batch", json={"texts": ["sofa"]})
        assert response.status_code == 503
