from fastapi import Request


def get_core(request: Request):
    """The ``ResponseCore`` the app was built around."""
    return request.app.state.core
