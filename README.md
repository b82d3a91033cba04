# metrix

A small web application for recording metrics such as body weight, daily
steps or calories burned, and the values you measure for them over time.
It runs on the Python standard library alone.

## Installation

```
pip install .
```

## Running the server

```
metrix serve
```

This starts a threaded WSGI server listening on port 8080 on every
interface. Open `http://localhost:8080/` in a browser. Another address can
be given with `--addr`, in `host:port` form (the host may be left out):

```
metrix serve --addr 127.0.0.1:9000
```

Ctrl+C or SIGTERM stops the server cleanly. A malformed address, or one
that cannot be bound, is logged and the command exits with status 1.
Running `metrix` with no command prints the help. The top-level
`-t`/`--toggle` flag is accepted but has no effect.

The same entry point is available as `metrix.cli.main(argv)`, which
returns the exit status instead of exiting.

The application starts with three sample metrics (Weight, Steps and
Calories) and a few recorded values. The pages load htmx and Pico CSS from
a public CDN, so a browser needs network access for the interactive parts
and the styling.

## Pages

- `/`: the home page. Any path that is not listed here also serves it.
- `/metrics`: pick a metric to view its title, unit and description, or
  choose "+ New Metric" to fill in a form and create one.
- `/entries`: pick a metric (the first one by default, or
  `?metric=<id>`), record a new value for it, and see every value
  recorded so far with its Unix timestamp.

The pages use htmx to swap fragments in place. These fragment endpoints
are also served:

- `/metrics/form?metric=<id>`: the field set for one metric
  (`metric=__new__` gives an empty form with a Create button).
- `/metrics/create` (form fields `title`, `unit`, `description`):
  creates a metric with the next free id. A missing title or unit is
  answered with status 400 and "Title and Unit are required".
- `/entries/values?metric=<id>`: the table of values for one metric.
- `/entries/add` (form fields `metric`, `value`): records the value with
  the current time and reports "Success! Value added.", or
  "Metric not found." / "Invalid value." when the input is wrong.

Form data may come in the query string or, for POST, PUT and PATCH, in an
`application/x-www-form-urlencoded` body. Malformed form data is answered
with status 400 and "Invalid form".

## Using it as a library

```python
from metrix.model import Store, default_store
from metrix.router import create_app, serve

store = default_store()
metric = store.add_metric("Blood Pressure", "mmHg", "Systolic pressure")
store.add_value(metric.id, 120.0, 1719500000)

store.find_metric(metric.id)          # the Metric, or None
store.values_for_metric(metric.id)    # its MetricValue entries, oldest first

app = create_app(store)        # a WSGI application (an App instance)
serve(":8080", store)          # or run it directly until interrupted
```

`Store.add_value` raises `KeyError` when no metric has the given id.
`create_app()` with no store uses a fresh copy of the sample data.
`App` can be hosted by any WSGI server.

The HTML is produced by plain functions that return strings:
`metrix.views.layout` (`layout`, `home_page`), `metrix.views.metrics`
(`metrics_page`, `metrics_form`, `select_metric`, `metric_fields`) and
`metrix.views.add_value` (`add_value_page`, `metric_dropdown`,
`metric_values_table`, `add_value_form`, `add_value_form_and_table`,
`format_number`). The request handlers in `metrix.handlers` take a store
and a mapping of parameters and return a `Response`; `create_metric`
raises `BadRequest` for missing fields.

## What it does not do

- Data lives in memory only and is lost when the server stops; there is
  no database or file storage.
- Existing metrics can be viewed but not edited or deleted, and recorded
  values cannot be changed or removed.
- There is no user accounts or authentication.

## Tests

```
pip install ".[test]"
pytest
```