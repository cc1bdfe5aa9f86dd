"""Signpost ASGI application.

Wraps one route program so any ASGI server can host it. A fresh Router
is built for every HTTP request; the App itself holds no request state.
"""

from signpost._internal.asgi import Receive, Scope, Send
from signpost._internal.types import RouteProgram
from signpost.config import RouterConfig
from signpost.errors import ConfigurationError
from signpost.server.handler import handle_request


class App:
    """ASGI 3.0 entry point for a route program.

    Usage::

        app = App(config=RouterConfig(base_path="/api"))

        @app.routes
        def routes(router):
            router.get("/users/:id", show_user)
            router.post("/users", create_user)

    ``App(program)`` works too when the program already exists.
    """

    __slots__ = ("_program", "config")

    def __init__(
        self,
        program: RouteProgram | None = None,
        config: RouterConfig | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._program: RouteProgram | None = program

    def routes(self, program: RouteProgram) -> RouteProgram:
        """Decorator that sets the route program. Returns it unchanged."""
        if self._program is not None:
            msg = "App already has a route program; an App serves exactly one."
            raise ConfigurationError(msg)
        self._program = program
        return program

    @property
    def program(self) -> RouteProgram:
        if self._program is None:
            msg = "No route program set. Pass one to App() or decorate it with @app.routes."
            raise ConfigurationError(msg)
        return self._program

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Acknowledges lifespan events, then delegates HTTP scopes to the
        request handler. Other scope types are ignored.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(
            scope,
            receive,
            send,
            program=self.program,
            config=self.config,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Startup fails fast when no route program is set.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                if self._program is None:
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": "No route program set.",
                        }
                    )
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
