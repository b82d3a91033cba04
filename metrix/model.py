"""In-memory metrics and their recorded values."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Metric:
    """A quantity being tracked, such as body weight."""

    id: int
    title: str
    unit: str
    description: str = ""


@dataclass
class MetricValue:
    """A single recorded value of a metric at a Unix timestamp."""

    id: int
    metric_id: int
    value: float
    timestamp: int


@dataclass
class Store:
    """Holds metrics and their values in insertion order."""

    metrics: list[Metric] = field(default_factory=list)
    values: list[MetricValue] = field(default_factory=list)

    def find_metric(self, metric_id: int) -> Metric | None:
        """Return the metric with the given id, or None if there is none."""
        return next((m for m in self.metrics if m.id == metric_id), None)

    def next_metric_id(self) -> int:
        """Return the id a newly created metric will receive."""
        return self.metrics[-1].id + 1 if self.metrics else 1

    def values_for_metric(self, metric_id: int) -> list[MetricValue]:
        """Return every value recorded for the given metric, oldest first."""
        return [v for v in self.values if v.metric_id == metric_id]

    def add_metric(self, title: str, unit: str, description: str = "") -> Metric:
        """Create a metric with the next free id and store it."""
        metric = Metric(
            id=self.next_metric_id(),
            title=title,
            unit=unit,
            description=description,
        )
        self.metrics.append(metric)
        return metric

    def add_value(self, metric_id: int, value: float, timestamp: int) -> MetricValue:
        """Record a value for an existing metric.

        Raises KeyError if no metric has the given id.
        """
        if self.find_metric(metric_id) is None:
            raise KeyError(metric_id)
        new_id = self.values[-1].id + 1 if self.values else 1
        entry = MetricValue(
            id=new_id,
            metric_id=metric_id,
            value=float(value),
            timestamp=int(timestamp),
        )
        self.values.append(entry)
        return entry


def default_store() -> Store:
    """Return a fresh store seeded with sample metrics and values."""
    return Store(
        metrics=[
            Metric(1, "Weight", "kg", "Body weight in kilograms"),
            Metric(2, "Steps", "steps", "Daily step count"),
            Metric(3, "Calories", "kcal", "Calories burned"),
        ],
        values=[
            MetricValue(1, 1, 70.5, 1719500000),
            MetricValue(2, 1, 71.0, 1719586400),
            MetricValue(3, 2, 10000.0, 1719500000),
            MetricValue(4, 2, 12000.0, 1719586400),
            MetricValue(5, 2, 9000.0, 1719672800),
            MetricValue(6, 3, 2200.0, 1719500000),
        ],
    )