from versekeep.mcp.client import VersekeepClient
from versekeep.mcp.server import create_mcp_server


def test_mcp_server_name(client):
    vk = VersekeepClient(client)
    mcp = create_mcp_server(vk)
    assert mcp.name == "versekeep"
