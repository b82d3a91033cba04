"""Views for recording new values against a metric."""

from __future__ import annotations

import math
from collections.abc import Sequence
from decimal import Decimal

from metrix.model import Metric, MetricValue
from metrix.views.layout import layout
from metrix.views.metrics import _escape


def format_number(value: float) -> str:
    """Format a value in its shortest exact decimal form, never with an exponent.

    Whole numbers carry no fractional part ("71"). Infinities are written
    as "+Inf" and "-Inf", and not-a-number as "NaN".
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def add_value_page(
    metrics: Sequence[Metric],
    selected: Metric | None,
    values: Sequence[MetricValue],
) -> str:
    """Render the full page for adding values to the selected metric."""
    return layout(
        "<h2>Add Value to Metric</h2><div>"
        f"{metric_dropdown(metrics, selected)}"
        "</div>"
        f"{add_value_form_and_table(selected, values, '', '')}"
    )


def metric_dropdown(metrics: Sequence[Metric], selected: Metric | None) -> str:
    """Render the drop-down that picks which metric's values are shown."""
    options = []
    for metric in metrics:
        marker = " selected" if selected is not None and selected.id == metric.id else ""
        options.append(
            f'<option value="{_escape(metric.id)}"{marker}>'
            f"{_escape(metric.title)}</option>"
        )
    return (
        '<label for="add-value-metric-select">Select metric:</label> '
        '<select id="add-value-metric-select" name="metric" '
        'hx-get="/entries/values" hx-target="#metric-values-table" '
        'hx-trigger="change" aria-label="Select metric">'
        + "".join(options)
        + "</select>"
    )


def metric_values_table(values: Sequence[MetricValue]) -> str:
    """Render a table of values and their timestamps."""
    rows = "".join(
        f"<tr><td>{_escape(format_number(v.value))}</td>"
        f"<td>{_escape(v.timestamp)}</td></tr>"
        for v in values
    )
    return (
        "<table><thead><tr><th>Value</th><th>Timestamp</th></tr></thead> "
        f"<tbody>{rows}</tbody></table>"
    )


def add_value_form(selected: Metric | None) -> str:
    """Render the form that submits a new value, showing the metric's unit."""
    unit = f"<span>{_escape(selected.unit)}</span> " if selected is not None else ""
    return (
        '<form id="add-value-form" hx-post="/entries/add" '
        'hx-include="#add-value-metric-select" '
        'hx-target="#add-value-form-and-table" hx-swap="outerHTML">'
        '<label for="add-value-value-input">Value:</label> '
        '<input id="add-value-value-input" name="value" type="number" '
        'step="any" aria-label="Value" required> '
        f"{unit}"
        '<button type="submit">Add Value</button></form>'
    )


def add_value_form_and_table(
    selected: Metric | None,
    values: Sequence[MetricValue],
    feedback: str,
    feedback_class: str,
) -> str:
    """Render the value form, optional feedback message and the values table."""
    message = ""
    if feedback:
        message = (
            f'<div id="add-value-form-feedback" class="{_escape(feedback_class)}">'
            f"{_escape(feedback)}</div>"
        )
    return (
        '<div id="add-value-form-and-table">'
        f"{add_value_form(selected)}"
        f"{message}"
        '<div id="metric-values-table">'
        f"{metric_values_table(values)}"
        "</div></div>"
    )