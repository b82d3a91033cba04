import io

import pytest

from metrix.model import Metric, MetricValue, Store
from metrix.router import App, create_app, serve


@pytest.fixture
def store():
    return Store(
        metrics=[
            Metric(1, "Weight", "kg", "Body weight in kilograms"),
            Metric(2, "Steps", "steps", "Daily step count"),
            Metric(3, "Calories", "kcal", "Calories burned"),
        ],
        values=[
            MetricValue(1, 1, 70.5, 1719500000),
            MetricValue(2, 1, 71.0, 1719586400),
            MetricValue(3, 2, 10000, 1719500000),
        ],
    )


@pytest.fixture
def app(store):
    return App(store, clock=lambda: 1719700000.0)


def call(app, path="/", method="GET", query="", body=b"",
         content_type="application/x-www-form-urlencoded"):
    environ = {
        "REQUEST_METHOD": method,
        "PATH_INFO": path,
        "QUERY_STRING": query,
        "CONTENT_TYPE": content_type,
        "CONTENT_LENGTH": str(len(body)),
        "wsgi.input": io.BytesIO(body),
    }
    captured = {}

    def start_response(status, headers, exc_info=None):
        captured["status"] = status
        captured["headers"] = dict(headers)

    chunks = app(environ, start_response)
    return captured["status"], captured["headers"], b"".join(chunks).decode("utf-8")


def test_home_page(app):
    status, headers, body = call(app, "/")
    assert status == "200 OK"
    assert "<title>Metrix 2025</title>" in body
    assert "Welcome to Metrix2! Track your metrics with ease." in body
    assert headers["Content-Length"] == str(len(body.encode("utf-8")))


def test_unknown_path_falls_back_to_home(app):
    status, _, body = call(app, "/no/such/page")
    assert status == "200 OK"
    assert "Welcome to Metrix2!" in body


def test_metric_form_fields_route(app):
    _, _, body = call(app, "/metrics/form", query="metric=2")
    assert 'value="Steps"' in body
    assert 'value="steps"' in body


def test_create_metric_then_listed(app, store):
    form = b"title=Blood+Pressure&unit=mmHg&description=Systolic%2FDiastolic+blood+pressure"
    status, headers, body = call(app, "/metrics/create", "POST", body=form)
    assert status == "200 OK"
    assert headers["Content-Type"] == "text/html"
    assert store.metrics[-1].description == "Systolic/Diastolic blood pressure"

    _, _, page = call(app, "/metrics")
    assert ">Blood Pressure</option>" in page


def test_create_metric_missing_fields(app, store):
    status, headers, body = call(app, "/metrics/create", "POST", body=b"title=Only")
    assert status == "400 Bad Request"
    assert body == "Title and Unit are required\n"
    assert headers["Content-Type"] == "text/plain; charset=utf-8"
    assert len(store.metrics) == 3


def test_malformed_form_is_rejected(app, store):
    status, _, body = call(app, "/entries/add", "POST", body=b"metric=1&value=%zz")
    assert status == "400 Bad Request"
    assert body == "Invalid form\n"
    assert len(store.values) == 3


def test_add_entry_route(app, store):
    status, _, body = call(app, "/entries/add", "POST", body=b"metric=1&value=72.3")
    assert status == "200 OK"
    assert "Success! Value added." in body
    assert "<tr><td>72.3</td><td>1719700000</td></tr>" in body
    assert store.values[-1].timestamp == 1719700000


def test_body_takes_precedence_over_query(app, store):
    call(app, "/entries/add", "POST", query="metric=2", body=b"metric=1&value=5")
    assert store.values[-1].metric_id == 1


def test_query_used_when_body_lacks_field(app, store):
    call(app, "/entries/add", "POST", query="metric=3", body=b"value=5")
    assert store.values[-1].metric_id == 3


def test_entries_route_selects_metric(app):
    _, _, body = call(app, "/entries", query="metric=2")
    assert '<option value="2" selected>Steps</option>' in body
    assert "<tr><td>10000</td>" in body


def test_create_app_uses_sample_data():
    app = create_app()
    _, _, body = call(app, "/metrics")
    assert ">Calories</option>" in body


@pytest.mark.parametrize("addr", ["nonsense", ":notaport", ":70000"])
def test_serve_rejects_bad_address(addr):
    with pytest.raises(ValueError):
        serve(addr)