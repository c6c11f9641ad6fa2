"""Check registry core — resolver, invoker, tag filter, aggregator."""

from .aggregate import effective_tags, should_run, worst_status
from .invoker import invoke, normalize_result
from .models import CheckEntry, CheckSource, HasDefaultTags, ResultRecord, Status
from .registry import HealthCheck
from .resolver import resolve_spec
