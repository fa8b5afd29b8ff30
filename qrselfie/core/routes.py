from typing import Dict, List

from fastapi import FastAPI

HTTP_METHODS = {"get", "put", "post", "delete", "options", "head", "patch", "trace"}


def collect_routes(app: FastAPI) -> List[Dict]:
    """
    Every path the app serves. Included routers are read back through the
    OpenAPI schema; hidden routes and static mounts come from ``app.routes``.
    """
    routes = []
    seen = set()
    for path, ops in app.openapi().get("paths", {}).items():
        methods = sorted(m.upper() for m in ops if m in HTTP_METHODS)
        name = next((ops[m].get("operationId", "") for m in ops if m in HTTP_METHODS), "")
        routes.append({"path": path, "methods": methods, "name": name})
        seen.add(path)

    for r in app.routes:
        path = getattr(r, "path", None)
        if not path or path in seen:
            continue
        methods = sorted(getattr(r, "methods", None) or [])
        routes.append({"path": path, "methods": methods, "name": getattr(r, "name", "")})
        seen.add(path)
    return routes
