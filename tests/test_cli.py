import json
from unittest.mock import patch

import pytest

from plot_market import cli
from plot_market.core.errors import ApiError
from plot_market.schemas.camera import Camera
from plot_market.schemas.project import Project


@pytest.fixture
def client():
    with patch("plot_market.cli.PlotMarketAPI") as api_cls:
        yield api_cls.return_value


def run(argv, capsys):
    code = cli.main(["--api-url", "http://market.test/api"] + argv)
    out, err = capsys.readouterr()
    return code, out, err


def test_projects_are_filtered_and_printed(client, capsys):
    client.get_projects.return_value = [
        Project(id="1", name="Green Valley", city="Mysuru"),
        Project(id="2", name="Palm Grove", city="Kochi"),
    ]

    code, out, _ = run(["projects", "--search", "green"], capsys)

    assert code == 0
    assert [p["name"] for p in json.loads(out)] == ["Green Valley"]


def test_errors_are_reported_on_stderr(client, capsys):
    client.get_visit_requests.side_effect = ApiError("Please sign in to view bookings", status_code=401)

    code, out, err = run(["bookings", "--clerk-id", "user_1"], capsys)

    assert code == 1
    assert out == ""
    assert "[!] Please sign in to view bookings" in err


def test_cameras_with_stream_urls(client, capsys):
    client.get_cameras.return_value = [
        Camera(id="cam-1", land_id="land-1", ip_address="10.0.0.5", label="Gate"),
    ]

    code, out, _ = run(["cameras", "list", "--clerk-id", "user_1", "--with-stream"], capsys)

    assert code == 0
    camera = json.loads(out)[0]
    assert camera["ipAddress"] == "10.0.0.5"
    assert camera["streamUrl"] == "http://10.0.0.5/video"


def test_feedback_purchase_interest_parsing(client, capsys):
    client.submit_feedback.return_value = {"id": "fb-1"}

    code, _, _ = run([
        "feedback", "submit", "visit-1", "--clerk-id", "user_1", "--rating", "5",
        "--experience", "Great", "--suggestions", "None", "--purchase-interest", "no",
    ], capsys)

    assert code == 0
    assert client.submit_feedback.call_args.kwargs["purchase_interest"] is False


def test_user_role_lookup(client, capsys):
    client.get_user_by_clerk_id.return_value = None

    code, out, _ = run(["user", "role", "--clerk-id", "user_1"], capsys)

    assert code == 0
    assert json.loads(out) == {"role": None, "route": "/(auth)/Role"}
