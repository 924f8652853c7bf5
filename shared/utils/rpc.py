"""
Internal RPC over HTTP

Every backend service exposes a single ``POST /rpc`` endpoint that takes a
``{"cmd": ..., "payload": {...}}`` envelope. Success answers ``{"result": ...}``
with HTTP 200; business and unexpected failures answer ``{"status", "message"}``
with the fault status as the HTTP status code.

Client side connection pooling follows httpx practice:
- Single shared AsyncClient initialized at app startup
- Proper limits to prevent connection exhaustion
- Pool timeout for fast failure under load
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Type

import httpx
import structlog
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

logger = structlog.get_logger(__name__)

RPC_PATH = "/rpc"
INVALID_PAYLOAD_MESSAGE = "Invalid command payload"


class RpcFault(Exception):
    """Failure carried across the RPC boundary as a {status, message} pair"""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "message": self.message}

    def __repr__(self):
        return f"RpcFault(status={self.status}, message={self.message!r})"


class RpcRequest(BaseModel):
    """Command envelope received by a service"""
    cmd: str
    payload: Dict[str, Any] = Field(default_factory=dict)


def encode_result(result: Any) -> Any:
    """Convert handler results (models, lists of models, None) to JSON primitives"""
    if isinstance(result, BaseModel):
        return result.model_dump(by_alias=True, mode="json")
    if isinstance(result, (list, tuple)):
        return [encode_result(item) for item in result]
    return jsonable_encoder(result)


def fault_response(fault: RpcFault) -> JSONResponse:
    return JSONResponse(status_code=fault.status, content=fault.to_dict())


def create_rpc_router(
    command_enum: Type[Enum],
    dispatch: Callable[[Any, Dict[str, Any], Any], Awaitable[Any]],
    get_service: Callable[..., Any],
) -> APIRouter:
    """
    Build the ``POST /rpc`` router for a service

    Args:
        command_enum: Closed set of commands the service answers
        dispatch: Coroutine ``(command, payload, service)`` that routes one command
        get_service: FastAPI dependency returning the service instance

    Returns:
        APIRouter with the RPC endpoint
    """
    router = APIRouter()

    @router.post(RPC_PATH)
    async def handle_command(request: RpcRequest, service=Depends(get_service)):
        try:
            command = command_enum(request.cmd)
        except ValueError:
            logger.warning("Unknown RPC command", cmd=request.cmd)
            return fault_response(RpcFault(400, INVALID_PAYLOAD_MESSAGE))

        try:
            result = await dispatch(command, request.payload, service)
        except RpcFault as fault:
            logger.info("RPC command failed", cmd=command.value, status=fault.status, message=fault.message)
            return fault_response(fault)
        except ValidationError as e:
            logger.warning("Invalid RPC payload", cmd=command.value, error=str(e))
            return fault_response(RpcFault(400, INVALID_PAYLOAD_MESSAGE))
        except Exception as e:
            logger.error("RPC command crashed", cmd=command.value, error=str(e), exc_info=True)
            return fault_response(RpcFault(500, "Internal server error"))

        return {"result": encode_result(result)}

    return router


def register_rpc_exception_handlers(app: FastAPI) -> None:
    """Answer malformed envelopes with the fault shape instead of FastAPI's 422"""

    @app.exception_handler(RequestValidationError)
    async def envelope_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("Malformed RPC envelope", path=request.url.path)
        return fault_response(RpcFault(400, INVALID_PAYLOAD_MESSAGE))


class RpcServiceClient:
    """
    RPC client for one downstream service.

    Uses a shared AsyncClient with connection pooling for efficient
    resource utilization under high concurrency.

    Lifecycle:
        - Call start() during app startup (FastAPI lifespan)
        - Call stop() during app shutdown
        - If not initialized, falls back to per-request client
    """

    service_name = "service"

    # Connection pool settings (per worker)
    MAX_CONNECTIONS = 100
    MAX_KEEPALIVE = 20
    KEEPALIVE_EXPIRY = 5.0

    # Timeout settings
    CONNECT_TIMEOUT = 5.0
    READ_TIMEOUT = 30.0
    WRITE_TIMEOUT = 5.0
    POOL_TIMEOUT = 30.0

    def __init__(
        self,
        base_url: str,
        read_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.read_timeout = read_timeout or self.READ_TIMEOUT
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _build_client(self) -> httpx.AsyncClient:
        limits = httpx.Limits(
            max_connections=self.MAX_CONNECTIONS,
            max_keepalive_connections=self.MAX_KEEPALIVE,
            keepalive_expiry=self.KEEPALIVE_EXPIRY
        )
        timeout = httpx.Timeout(
            connect=self.CONNECT_TIMEOUT,
            read=self.read_timeout,
            write=self.WRITE_TIMEOUT,
            pool=self.POOL_TIMEOUT
        )
        return httpx.AsyncClient(
            base_url=self.base_url,
            limits=limits,
            timeout=timeout,
            transport=self._transport
        )

    async def start(self):
        """
        Initialize the shared HTTP client.
        Call this during FastAPI app startup via lifespan.
        """
        if self._client is not None:
            logger.warning("RPC client already started", service=self.service_name)
            return

        self._client = self._build_client()
        logger.info(
            "RPC client started",
            service=self.service_name,
            base_url=self.base_url,
            max_connections=self.MAX_CONNECTIONS,
            read_timeout=self.read_timeout
        )

    async def stop(self):
        """
        Close the HTTP client and release resources.
        Call this during FastAPI app shutdown via lifespan.
        """
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("RPC client stopped", service=self.service_name)

    async def _post(self, body: Dict[str, Any]) -> httpx.Response:
        if self._client:
            return await self._client.post(RPC_PATH, json=body)

        logger.warning("RPC client not initialized, using per-request client", service=self.service_name)
        async with self._build_client() as client:
            return await client.post(RPC_PATH, json=body)

    async def send(self, cmd: Enum, payload: Optional[Any] = None) -> Any:
        """
        Send one command and wait for its result

        Args:
            cmd: Command enum member
            payload: Pydantic model or plain dict

        Returns:
            The decoded ``result`` value (may be None)

        Raises:
            RpcFault: On a fault answer, a timeout, or an unreachable service
        """
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(by_alias=True, mode="json", exclude_unset=True)
        body = {"cmd": cmd.value, "payload": jsonable_encoder(payload or {})}

        try:
            response = await self._post(body)
        except httpx.PoolTimeout:
            logger.error("Connection pool exhausted", service=self.service_name, cmd=cmd.value)
            raise RpcFault(503, f"{self.service_name} temporarily unavailable")
        except httpx.TimeoutException as e:
            logger.error("RPC call timed out", service=self.service_name, cmd=cmd.value, error=str(e))
            raise RpcFault(503, f"{self.service_name} did not respond in time")
        except httpx.RequestError as e:
            logger.error("RPC request error", service=self.service_name, cmd=cmd.value, error=str(e))
            raise RpcFault(503, f"{self.service_name} unavailable")

        if response.status_code >= 400:
            raise self._fault_from_response(response)

        try:
            return response.json().get("result")
        except ValueError:
            logger.error("Undecodable RPC answer", service=self.service_name, cmd=cmd.value)
            raise RpcFault(500, "Invalid response from " + self.service_name)

    def _fault_from_response(self, response: httpx.Response) -> RpcFault:
        status = response.status_code
        message = f"{self.service_name} request failed"
        try:
            data = response.json()
            status = int(data.get("status") or status)
            message = data.get("message") or message
        except (ValueError, AttributeError, TypeError):
            pass
        return RpcFault(status, message)

    async def health_check(self) -> str:
        """Check if the downstream service is healthy"""
        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=5.0, transport=self._transport) as client:
                response = await client.get("/health")
            if response.status_code == 200:
                return "healthy"
            return "unhealthy"
        except httpx.HTTPError:
            return "unreachable"
