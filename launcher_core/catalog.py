from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Set, Tuple

from .errors import DuplicateTool


@dataclass(frozen=True)
class Category:
    category_id: str
    title: str
    icon: str
    tools: Tuple[str, ...]


DEFAULT_CATALOG: Tuple[Category, ...] = (
    Category(
        category_id="network",
        title="NETWORK",
        icon="📡",
        tools=(
            "Cek IP",
            "Cek Routing",
            "Netstat",
            "ARP Table",
            "Ping Connectivity",
        ),
    ),
    Category(
        category_id="application_system",
        title="APPLICATION / SYSTEM",
        icon="💻",
        tools=(
            "List PS Drives",
            "Access HKLM Registry",
            "Startup Registry Check",
        ),
    ),
    Category(
        category_id="malware_antivirus",
        title="MALWARE / ANTI VIRUS",
        icon="🛡️",
        tools=(
            "Microsoft Malware Removal Tool",
            "Check Default Antivirus Status",
        ),
    ),
    Category(
        category_id="remote_services",
        title="REMOTE SERVICES",
        icon="🔗",
        tools=(
            "Windows Services",
            "Remote System Properties",
            "Device Manager (Bluetooth)",
            "Registry Editor",
            "Task Manager",
            "Startup Services",
        ),
    ),
    Category(
        category_id="clean_files",
        title="CLEAN FILES",
        icon="🧹",
        tools=(
            "Open Temp Folder",
            "Open Trash / Recycle Bin",
            "Open Microsoft Office Temp Files",
        ),
    ),
)


def iter_categories(catalog: Sequence[Category] = DEFAULT_CATALOG) -> Iterator[Category]:
    return iter(catalog)


def iter_tools(catalog: Sequence[Category] = DEFAULT_CATALOG) -> Iterator[Tuple[Category, str]]:
    for category in catalog:
        for tool_name in category.tools:
            yield category, tool_name


def tool_names(catalog: Sequence[Category] = DEFAULT_CATALOG) -> List[str]:
    return [name for _, name in iter_tools(catalog)]


def find_category(tool_name: str, catalog: Sequence[Category] = DEFAULT_CATALOG) -> Category | None:
    for category, name in iter_tools(catalog):
        if name == tool_name:
            return category
    return None


def validate_catalog(catalog: Iterable[Category] = DEFAULT_CATALOG) -> Tuple[Category, ...]:
    """Check that category ids and tool names are unique; return the catalog as a tuple."""
    items = tuple(catalog)
    seen_ids: Set[str] = set()
    owners: dict[str, str] = {}
    for category in items:
        if category.category_id in seen_ids:
            raise ValueError(f"duplicate category id: {category.category_id!r}")
        seen_ids.add(category.category_id)
        for name in category.tools:
            if name in owners:
                raise DuplicateTool(name, f"{owners[name]} and {category.category_id}")
            owners[name] = category.category_id
    return items
