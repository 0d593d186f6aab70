"""Table dependency graph for the migration.

Each table lists the tables its rows reference. Parents are migrated
before children; adding a table means declaring its edges here.
"""

from __future__ import annotations

from graphlib import CycleError, TopologicalSorter
from typing import Iterable

from orbit.errors import DependencyGraphError

TABLE_DEPENDENCIES: dict[str, tuple[str, ...]] = {
    "users": (),
    "courses": (),
    "leads": ("users",),
    "trainers": (),
    "registration_links": ("courses", "users"),
    "students": ("users", "courses"),
    "registration_courses": ("students", "courses"),
    "invoices": ("students",),
    "schedules": ("courses", "trainers", "users"),
    "schedule_students": ("schedules", "students"),
    "certificates": ("students", "courses", "users"),
    "follow_ups": ("leads", "users"),
    "campaigns": ("users",),
    "quotations": ("users",),
    "quotation_items": ("quotations", "courses"),
    "proposals": ("users",),
    "chatbot_flows": ("users",),
    "chatbot_nodes": ("chatbot_flows",),
    "chatbot_conditions": ("chatbot_nodes",),
    "chatbot_actions": ("chatbot_nodes",),
    "chatbot_sessions": ("chatbot_flows",),
    "canned_responses": ("users",),
    "expenses": ("users",),
    "employees": ("users",),
    "attendance_records": ("employees",),
}


def migration_order(
    tables: Iterable[str] | None = None,
    graph: dict[str, tuple[str, ...]] = TABLE_DEPENDENCIES,
) -> list[str]:
    """Order tables so every parent precedes its children.

    Tables that become ready at the same time keep their declaration order.

    Args:
        tables: Subset to migrate. Defaults to every declared table.
        graph: Mapping of table -> parent tables.

    Returns:
        Table names in migration order.

    Raises:
        DependencyGraphError: On unknown tables or parents, or a cycle.
    """
    for table, parents in graph.items():
        unknown = [p for p in parents if p not in graph]
        if unknown:
            raise DependencyGraphError(f"{table} depends on undeclared tables {unknown}")

    position = {name: i for i, name in enumerate(graph)}
    sorter = TopologicalSorter(graph)
    try:
        sorter.prepare()
    except CycleError as e:
        raise DependencyGraphError(f"dependency cycle: {' -> '.join(e.args[1])}") from e

    order: list[str] = []
    while sorter.is_active():
        ready = sorted(sorter.get_ready(), key=position.__getitem__)
        order.extend(ready)
        sorter.done(*ready)

    if tables is None:
        return order

    selected = list(tables)
    unknown = [t for t in selected if t not in graph]
    if unknown:
        raise DependencyGraphError(f"unknown tables {unknown}")
    return [t for t in order if t in set(selected)]
