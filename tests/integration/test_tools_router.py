"""Integration tests for the tools API."""

import pytest
from httpx import AsyncClient

OPENAI = {
    "name": "OpenAI",
    "description": "AI research and deployment company",
    "website": "http://openai.com/",
}


@pytest.mark.asyncio
async def test_tool_crud_round_trip(client: AsyncClient, viewer_headers):
    created = await client.post("/api/v1/tools", json=OPENAI, headers=viewer_headers)
    assert created.status_code == 201
    assert created.json()["message"] == "New Tool Created"
    tool = created.json()["tool"]
    assert tool["name"] == "OpenAI"
    assert "createdAt" in tool

    listed = await client.get("/api/v1/tools", headers=viewer_headers)
    assert listed.status_code == 200
    assert listed.json()["message"] == "Get list all tools"
    assert listed.json()["counter"] == 1

    fetched = await client.get(f"/api/v1/tools/{tool['id']}", headers=viewer_headers)
    assert fetched.status_code == 200
    assert fetched.json()["message"] == "Get tool by ID"

    updated = await client.put(
        f"/api/v1/tools/{tool['id']}",
        json={**OPENAI, "description": "Makers of GPT"},
        headers=viewer_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["message"] == "Tool Updated"
    assert updated.json()["tool"]["description"] == "Makers of GPT"

    deleted = await client.delete(f"/api/v1/tools/{tool['id']}", headers=viewer_headers)
    assert deleted.status_code == 200
    assert deleted.json()["message"] == f"Tool with ID {tool['id']} deleted with success"

    gone = await client.get(f"/api/v1/tools/{tool['id']}", headers=viewer_headers)
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_create_tool_duplicate_name(client: AsyncClient, viewer_headers):
    await client.post("/api/v1/tools", json=OPENAI, headers=viewer_headers)

    res = await client.post("/api/v1/tools", json=OPENAI, headers=viewer_headers)

    assert res.status_code == 409
    assert res.json() == {
        "success": False,
        "message": "There is already a registered tool with that name",
        "error": "Tool already registered",
        "statusCode": 409,
    }


@pytest.mark.asyncio
async def test_rename_tool_to_taken_name(client: AsyncClient, viewer_headers):
    await client.post("/api/v1/tools", json=OPENAI, headers=viewer_headers)
    other = await client.post(
        "/api/v1/tools",
        json={"name": "Anthropic", "description": "AI safety", "website": "https://anthropic.com"},
        headers=viewer_headers,
    )

    res = await client.put(
        f"/api/v1/tools/{other.json()['tool']['id']}", json=OPENAI, headers=viewer_headers
    )

    assert res.status_code == 409


@pytest.mark.asyncio
async def test_create_tool_invalid_website(client: AsyncClient, viewer_headers):
    res = await client.post(
        "/api/v1/tools", json={**OPENAI, "website": "not a url"}, headers=viewer_headers
    )

    assert res.status_code == 400
    errors = res.json()["errors"]
    assert errors[0]["field"] == "website"
    assert "Website must be a url" in errors[0]["message"]


@pytest.mark.asyncio
async def test_website_stored_as_given(client: AsyncClient, viewer_headers):
    res = await client.post(
        "/api/v1/tools", json={**OPENAI, "website": "https://openai.com"}, headers=viewer_headers
    )

    assert res.json()["tool"]["website"] == "https://openai.com"


@pytest.mark.asyncio
async def test_unknown_tool(client: AsyncClient, viewer_headers):
    res = await client.get("/api/v1/tools/does-not-exist", headers=viewer_headers)

    assert res.status_code == 404
    assert res.json()["message"] == "Tool not found"
    assert res.json()["error"] == "Unregistered tool"


@pytest.mark.asyncio
async def test_delete_unknown_tool(client: AsyncClient, viewer_headers):
    res = await client.delete("/api/v1/tools/does-not-exist", headers=viewer_headers)

    assert res.status_code == 404
    assert res.json()["error"] == "Not Found"
