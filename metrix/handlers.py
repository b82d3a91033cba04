"""Request handlers: each turns request parameters into a rendered response."""

from __future__ import annotations

import re
import time
from collections.abc import Mapping
from dataclasses import dataclass

from metrix.model import Metric, MetricValue, Store
from metrix.views.add_value import (
    add_value_form_and_table,
    add_value_page,
    metric_values_table,
)
from metrix.views.layout import home_page
from metrix.views.metrics import NEW_METRIC_VALUE, metric_fields, metrics_form, metrics_page

HTML = "text/html; charset=utf-8"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL = re.compile(r"nan|[+-]?inf(?:inity)?", re.IGNORECASE)


@dataclass(frozen=True)
class Response:
    """A rendered response body with its status and content type."""

    body: str
    status: int = 200
    content_type: str = HTML


class BadRequest(Exception):
    """The request cannot be served as sent; answered with status 400."""

    status = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _parse_int(text: str) -> int | None:
    """Parse a signed 64-bit decimal integer, or return None."""
    if not _INTEGER.fullmatch(text):
        return None
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        return None
    return number


def _parse_float(text: str) -> float | None:
    """Parse a finite-range floating point literal, or return None."""
    if _SPECIAL.fullmatch(text):
        return float(text)
    if _DECIMAL.fullmatch(text):
        number = float(text)
        return None if number in (float("inf"), float("-inf")) else number
    if _HEX_FLOAT.fullmatch(text):
        try:
            return float.fromhex(text)
        except OverflowError:
            return None
    return None


def _lookup(store: Store, text: str) -> Metric | None:
    metric_id = _parse_int(text)
    return store.find_metric(metric_id) if metric_id is not None else None


def _values_of(store: Store, metric: Metric | None) -> list[MetricValue]:
    return store.values_for_metric(metric.id) if metric is not None else []


def home(store: Store, query: Mapping[str, str]) -> Response:
    """Serve the welcome page."""
    return Response(home_page())


def metrics(store: Store, query: Mapping[str, str]) -> Response:
    """Serve the page listing metrics, with the first one selected."""
    return Response(metrics_page(store.metrics))


def metric_form_fields(store: Store, query: Mapping[str, str]) -> Response:
    """Serve the fields for the metric named in the query, or blank ones."""
    id_text = query.get("metric", "")
    if id_text == NEW_METRIC_VALUE:
        return Response(metric_fields(None, True))
    return Response(metric_fields(_lookup(store, id_text), False))


def create_metric(store: Store, form: Mapping[str, str]) -> Response:
    """Create a metric from the submitted form and serve the refreshed form.

    Raises BadRequest when the title or the unit is missing.
    """
    title = form.get("title", "")
    unit = form.get("unit", "")
    description = form.get("description", "")
    if not title or not unit:
        raise BadRequest("Title and Unit are required")
    metric = store.add_metric(title, unit, description)
    return Response(metrics_form(store.metrics, metric), content_type="text/html")


def entries(store: Store, query: Mapping[str, str]) -> Response:
    """Serve the page for adding values, for the chosen or the first metric."""
    selected = store.metrics[0] if store.metrics else None
    id_text = query.get("metric", "")
    if id_text:
        metric_id = _parse_int(id_text)
        if metric_id is not None:
            selected = store.find_metric(metric_id)
    return Response(add_value_page(store.metrics, selected, _values_of(store, selected)))


def entries_values_table(store: Store, query: Mapping[str, str]) -> Response:
    """Serve the table of values for the metric named in the query."""
    selected = _lookup(store, query.get("metric", ""))
    return Response(metric_values_table(_values_of(store, selected)))


def add_entry(
    store: Store, form: Mapping[str, str], now: float | None = None
) -> Response:
    """Record a submitted value and serve the form, feedback and table.

    ``now`` is the Unix time stamped on the value; the current time by default.
    """
    selected = _lookup(store, form.get("metric", ""))
    if selected is None:
        feedback, feedback_class = "Metric not found.", "error"
    else:
        value = _parse_float(form.get("value", ""))
        if value is None:
            feedback, feedback_class = "Invalid value.", "error"
        else:
            timestamp = int(time.time() if now is None else now)
            store.add_value(selected.id, value, timestamp)
            feedback, feedback_class = "Success! Value added.", "success"
    return Response(
        add_value_form_and_table(
            selected, _values_of(store, selected), feedback, feedback_class
        )
    )