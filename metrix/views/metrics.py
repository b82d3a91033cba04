"""Views for browsing metrics and creating new ones."""

from __future__ import annotations

from collections.abc import Sequence

from metrix.model import Metric
from metrix.views.layout import layout

NEW_METRIC_VALUE = "__new__"

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "'": "&#39;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&#34;",
    }
)


def _escape(text: object) -> str:
    """Escape text for use in HTML content or a quoted attribute."""
    return str(text).translate(_ESCAPES)


def metrics_page(metrics: Sequence[Metric]) -> str:
    """Render the full metrics page, with the first metric selected."""
    selected = metrics[0] if metrics else None
    return layout(metrics_form(metrics, selected))


def metrics_form(metrics: Sequence[Metric], selected: Metric | None) -> str:
    """Render the metric picker together with the fields of the selection."""
    return (
        '<form id="metric-form"><div id="metric-select-container">'
        f"{select_metric(metrics, selected)}"
        '</div><div id="metric-form-fields">'
        f"{metric_fields(selected, selected is None)}"
        "</div></form>"
    )


def select_metric(metrics: Sequence[Metric], selected: Metric | None) -> str:
    """Render the drop-down listing every metric plus a "new metric" entry."""
    options = []
    for metric in metrics:
        marker = " selected" if selected is not None and selected.id == metric.id else ""
        options.append(
            f'<option value="{_escape(metric.id)}"{marker}>'
            f"{_escape(metric.title)}</option> "
        )
    return (
        '<label for="metric-select">Select metric:</label> '
        '<select id="metric-select" name="metric" hx-get="/metrics/form" '
        'hx-target="#metric-form-fields" hx-include="[name=metric]" '
        'hx-trigger="change">'
        + "".join(options)
        + f'<option value="{NEW_METRIC_VALUE}">+ New Metric</option></select>'
    )


def metric_fields(metric: Metric | None, is_create: bool) -> str:
    """Render the title, unit and description inputs for a metric.

    With no metric the inputs are empty; with ``is_create`` a button to
    create a new metric is added.
    """
    parts = ['<label for="metric-title">Title</label> ']
    if metric is not None:
        parts.append(
            '<input id="metric-title" name="title" aria-label="Metric title" '
            f'value="{_escape(metric.title)}" required> '
        )
    else:
        parts.append(
            '<input id="metric-title" name="title" aria-label="Metric title" required> '
        )

    parts.append('<label for="metric-unit">Unit</label> ')
    if metric is not None:
        parts.append(
            '<input id="metric-unit" name="unit" aria-label="Metric unit" '
            f'value="{_escape(metric.unit)}" required> '
        )
    else:
        parts.append(
            '<input id="metric-unit" name="unit" aria-label="Metric unit" required> '
        )

    parts.append('<label for="metric-description">Description</label> ')
    description = _escape(metric.description) if metric is not None else ""
    parts.append(
        '<textarea id="metric-description" name="description" '
        f'aria-label="Metric description">{description}</textarea> '
    )

    if is_create:
        parts.append(
            '<button hx-post="/metrics/create" hx-target="#metric-form" '
            'hx-swap="outerHTML" aria-label="Create metric">Create</button>'
        )
    return "".join(parts)