from __future__ import annotations

from typing import Dict, List

from .registry import get_api_functions, register_api


@register_api(
    "list_available_tools",
    description="List all calendar tools with descriptions, categories, and parameter schemas.",
    category="meta",
    tags=("tools", "metadata"),
    read_only=True,
)
def list_available_tools() -> Dict[str, List[dict]]:
    tools = [
        {
            "name": func.name,
            "description": func.description,
            "category": func.category,
            "tags": list(func.tags),
            "read_only": func.read_only,
            "destructive": func.destructive,
            "parameters": func.parameter_schema,
        }
        for func in sorted(get_api_functions(), key=lambda item: item.name)
    ]
    return {"tools": tools}
