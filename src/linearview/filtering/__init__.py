"""Issue and project filtering."""

from linearview.filtering.engine import (
    ALL_MILESTONES,
    FilterCriteria,
    apply,
    distinct_label_names,
    distinct_state_names,
    filter_projects,
    matches,
)

__all__ = [
    "ALL_MILESTONES",
    "FilterCriteria",
    "apply",
    "distinct_label_names",
    "distinct_state_names",
    "filter_projects",
    "matches",
]
