from typing import Any

from fastapi import HTTPException


class CustomException(HTTPException):
    def __init__(
        self,
        status_code: int,
        detail: Any = None,
        headers: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(status_code, detail, headers)

    def __str__(self) -> str:
        return str(self.detail)


class ValidationError(CustomException):
    def __init__(self, detail: str = "Validation error"):
        super().__init__(status_code=422, detail=detail)


class NotFoundError(CustomException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=404, detail=detail)


class SymbolNotFoundError(NotFoundError):
    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(detail="Symbol not found")


class UnknownToolError(CustomException):
    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(status_code=400, detail=f"Unknown tool: {tool_name}")
