"""Turn request-path responses into extension page props."""

import json
from typing import Any

from roamjs_docs.models.node import Response


def page_props(extension_id: str, response: Response) -> dict[str, Any]:
    """Map a request-path response to the props of an extension page.

    A failed render still produces a page: the error text becomes its content
    and the page is flagged as under development. Callers must treat
    ``development: True`` without a ``state`` as a failure.
    """
    if response.status_code != 200:
        return {
            "content": f"Failed to render due to: {response.body}",
            "id": extension_id,
            "development": True,
        }

    data: dict[str, Any] = json.loads(response.body)
    state = data.get("state")
    return {
        **data,
        "id": extension_id,
        "development": state == "DEVELOPMENT",
        "legacy": state == "LEGACY",
    }
