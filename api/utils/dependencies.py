from fastapi import Request

from api.bootstrap import Studio


async def get_studio(request: Request) -> Studio:
    """The Studio wired at app startup (see api.api.create_app)."""
    return request.app.state.studio
