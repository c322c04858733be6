"""
Minimal stand-in for the Ghost Admin API, used through httpx.ASGITransport.

Verifies the Ghost token on every request and serves canned responses for a
handful of post routes. Every request seen is recorded on app.state.requests.
"""

import jwt
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse, Response

PREFIX = "/ghost/api/admin"


def _ghost_error(status_code: int, message: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"errors": [{"message": message, "type": error_type}]},
    )


def create_stub_app(key_id: str, secret_hex: str) -> FastAPI:
    app = FastAPI(title="Ghost Admin API stub")
    app.state.requests = []
    router = APIRouter(prefix=PREFIX)

    @app.middleware("http")
    async def check_token(request: Request, call_next):
        app.state.requests.append(
            {
                "method": request.method,
                "path": request.url.path,
                "query": request.url.query,
                "headers": dict(request.headers),
                "body": b"",
            }
        )
        scheme, _, token = request.headers.get("authorization", "").partition(" ")
        if scheme != "Ghost" or not token:
            return _ghost_error(401, "Authorization header format is \"Authorization: Ghost [token]\"", "UnauthorizedError")
        try:
            header = jwt.get_unverified_header(token)
            jwt.decode(token, bytes.fromhex(secret_hex), algorithms=["HS256"], audience="/admin/")
        except jwt.InvalidTokenError as e:
            return _ghost_error(401, f"Invalid token: {e}", "UnauthorizedError")
        if header.get("kid") != key_id:
            return _ghost_error(401, "Unknown Admin API Key", "UnauthorizedError")
        return await call_next(request)

    @router.get("/posts/")
    async def browse_posts():
        return {"posts": [], "meta": {}}

    @router.post("/posts/")
    async def add_post(request: Request):
        app.state.requests[-1]["body"] = await request.body()
        payload = await request.json()
        title = payload["posts"][0]["title"]
        return JSONResponse(status_code=201, content={"posts": [{"id": "abc", "title": title}]})

    @router.put("/posts/{post_id}/")
    async def edit_post(post_id: str, request: Request):
        app.state.requests[-1]["body"] = await request.body()
        payload = await request.json()
        return {"posts": [dict(payload["posts"][0], id=post_id)]}

    @router.delete("/posts/{post_id}/")
    async def delete_post(post_id: str):
        if post_id == "abc":
            return Response(status_code=204)
        return _ghost_error(404, "Resource not found", "NotFoundError")

    @router.get("/site/")
    async def site_not_json():
        return Response(content="<html>maintenance</html>", media_type="text/html")

    @router.get("/boom/")
    async def boom():
        return JSONResponse(status_code=500, content={"errors": [{"message": "Internal server error", "context": "db down"}]})

    app.include_router(router)
    return app
