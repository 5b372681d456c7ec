"""A stand-in resumable upload engine that completes an upload in a single POST."""
import json
from pathlib import Path

from starlette.requests import Request
from starlette.responses import Response


class FakeUploadEngine:
    def __init__(self, *, directory: Path, naming_function, path: str):
        self.directory = directory
        self.naming_function = naming_function
        self.path = path

    async def __call__(self, scope, receive, send):
        request = Request(scope, receive)
        path = request.url.path

        if request.method == "POST" and path == self.path:
            name = self.naming_function(request.headers)
            body = await request.body()
            (self.directory / name).write_bytes(body)
            (self.directory / f"{name}.info").write_text(
                json.dumps({"id": name, "size": len(body), "offset": len(body)})
            )
            response = Response(status_code=201, headers={"Location": f"{self.path}/{name}"})
            await response(scope, receive, send)
        elif path == f"{self.path}/explode":
            raise RuntimeError("engine exploded")
        elif path == f"{self.path}/explode-late":
            await send({"type": "http.response.start", "status": 200, "headers": []})
            raise RuntimeError("engine exploded mid-response")
        # anything else is not a protocol operation: no response


def create_engine(*, directory, naming_function, path):
    return FakeUploadEngine(directory=directory, naming_function=naming_function, path=path)
