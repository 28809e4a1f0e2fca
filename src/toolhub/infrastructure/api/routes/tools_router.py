"""Tool catalogue API routes. All routes require an authenticated caller."""

from fastapi import APIRouter, status

from toolhub.domain.services import ToolAlreadyRegisteredError
from toolhub.infrastructure.api.dependencies import ToolServiceDep
from toolhub.infrastructure.api.errors import ApiError
from toolhub.infrastructure.api.schemas import (
    DeleteResponse,
    ErrorResponse,
    ToolEnvelope,
    ToolListResponse,
    ToolRequest,
    ToolResponse,
)
from toolhub.infrastructure.persistence.models import ToolModel

router = APIRouter()

NAME_TAKEN_MESSAGE = "There is already a registered tool with that name"


async def _get_tool_or_404(tools: ToolServiceDep, tool_id: str) -> ToolModel:
    tool = await tools.get_tool(tool_id)
    if tool is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Tool not found", "Unregistered tool")
    return tool


@router.get("", response_model=ToolListResponse)
async def list_tools(tools: ToolServiceDep) -> ToolListResponse:
    found = await tools.list_tools()
    return ToolListResponse(
        message="Get list all tools",
        tools=[ToolResponse.model_validate(t) for t in found],
        counter=len(found),
        status_code=status.HTTP_200_OK,
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ToolEnvelope,
    responses={409: {"model": ErrorResponse, "description": "Tool already registered"}},
)
async def create_tool(request: ToolRequest, tools: ToolServiceDep) -> ToolEnvelope:
    try:
        tool = await tools.create_tool(request.name, request.description, request.website)
    except ToolAlreadyRegisteredError:
        raise ApiError(status.HTTP_409_CONFLICT, NAME_TAKEN_MESSAGE, "Tool already registered")

    return ToolEnvelope(
        message="New Tool Created",
        tool=ToolResponse.model_validate(tool),
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{tool_id}", response_model=ToolEnvelope)
async def get_tool(tool_id: str, tools: ToolServiceDep) -> ToolEnvelope:
    tool = await _get_tool_or_404(tools, tool_id)
    return ToolEnvelope(
        message="Get tool by ID",
        tool=ToolResponse.model_validate(tool),
        status_code=status.HTTP_200_OK,
    )


@router.put("/{tool_id}", response_model=ToolEnvelope)
async def update_tool(tool_id: str, request: ToolRequest, tools: ToolServiceDep) -> ToolEnvelope:
    tool = await _get_tool_or_404(tools, tool_id)
    try:
        tool = await tools.update_tool(tool, request.name, request.description, request.website)
    except ToolAlreadyRegisteredError:
        raise ApiError(status.HTTP_409_CONFLICT, NAME_TAKEN_MESSAGE, "Tool already registered")

    return ToolEnvelope(
        message="Tool Updated",
        tool=ToolResponse.model_validate(tool),
        status_code=status.HTTP_200_OK,
    )


@router.delete("/{tool_id}", response_model=DeleteResponse)
async def delete_tool(tool_id: str, tools: ToolServiceDep) -> DeleteResponse:
    if await tools.get_tool(tool_id) is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Tool not found", "Not Found")

    await tools.delete_tool(tool_id)
    return DeleteResponse(
        message=f"Tool with ID {tool_id} deleted with success",
        status_code=status.HTTP_200_OK,
    )
