import json
from unittest.mock import MagicMock

import pytest
import requests

from plot_market.client import PlotMarketAPI


BASE_URL = "http://market.test/api"


def make_response(status=200, body=None, *, text=None):
    """Build a real ``requests.Response`` so ``raise_for_status`` behaves."""
    resp = requests.Response()
    resp.status_code = status
    resp.reason = "OK" if status < 400 else "Error"
    resp.url = BASE_URL
    if body is not None:
        resp._content = json.dumps(body).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    elif text is not None:
        resp._content = text.encode("utf-8")
    else:
        resp._content = b""
    resp.encoding = "utf-8"
    return resp


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return PlotMarketAPI(base_url=BASE_URL, api_key="", timeout=15, session=session)


@pytest.fixture
def plot_payload():
    return {
        "id": "plot-1",
        "title": "Corner Plot 12",
        "dimension": "30x40",
        "price": 2500000,
        "priceLabel": "25 Lac",
        "status": "AVAILABLE",
        "imageUrls": ["https://img.test/1.jpg"],
        "location": "Green Valley, Mysuru",
        "latitude": 12.3,
        "longitude": 76.6,
        "facing": "East",
        "amenities": ["Water", "Road"],
        "projectId": "proj-1",
        "createdAt": "2024-03-01T10:00:00.000Z",
    }


@pytest.fixture
def visit_payload():
    return {
        "id": "visit-1",
        "name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "9876543210",
        "date": "2024-05-01",
        "time": "10:30 AM",
        "status": "APPROVED",
        "qrCode": "data:image/png;base64,AAAA",
        "expiresAt": "2024-05-02T00:00:00.000Z",
        "plot": {
            "id": "plot-1",
            "title": "Corner Plot 12",
            "location": "Green Valley, Mysuru",
            "project": {"id": "proj-1", "name": "Green Valley"},
        },
        "user": None,
        "feedback": None,
        "createdAt": "2024-04-20T09:00:00.000Z",
        "updatedAt": "2024-04-21T09:00:00.000Z",
    }
