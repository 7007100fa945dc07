from fastapi import Request


async def get_user(request: Request) -> str:
    # No auth layer: every request acts as the configured demo user.
    user_id: str = request.app.state.settings.demo_user_id  # pyright: ignore[reportAny]
    return user_id
