"""Per-connection recording state."""

from __future__ import annotations

from dataclasses import dataclass, field

from recordriver.core.response import Response


@dataclass(slots=True)
class Session:
    """Queries and statements executed under one connection name.

    `queries` and `statements` only ever grow; entries disappear when the whole
    session is deleted from its registry.
    """

    name: str
    queries: list[str] = field(default_factory=list)
    statements: list[str] = field(default_factory=list)
    responses: dict[str, Response] = field(default_factory=dict, repr=False)

    def stmts(self) -> str:
        """Return the recorded statements, each terminated by `;` and a newline."""

        return "".join(f"{statement};\n" for statement in self.statements)

    def record_statement(self, query: str) -> None:
        self.statements.append(query)

    def record_query(self, query: str) -> Response:
        """Log *query* and return the response registered for its exact text."""

        self.queries.append(query)
        response = self.responses.get(query)
        if response is None:
            return Response()
        return response

    def set_response(self, query: str, response: Response) -> None:
        self.responses[query] = response

    def snapshot(self) -> Session:
        """Return a copy whose logs are detached from this session."""

        return Session(
            name=self.name,
            queries=list(self.queries),
            statements=list(self.statements),
            responses=dict(self.responses),
        )
