# demo_mcp_create_schema.py
# Version: v1
#
# Demo: call the MCP-style create_schema / update_schema tasks directly
# against a real Blocks tenant and print the results.
#
# Usage (bash):
#
#   export BLOCKS_KEY=... USERNAME=... USER_KEY=... API_BASE_URL=...
#   python demo_mcp_create_schema.py <ProjectKey> [ItemId]

import asyncio
import sys
from typing import Any, Dict

from blocks_schema_mcp.tools import tasks


def _print_result(result: Dict[str, Any]) -> None:
    if result.get("ok"):
        print(result["message"])
        return

    err = result.get("error", {})
    print(f"FAILED [{err.get('kind')}] {err.get('message')}")
    if err.get("details"):
        print(f"  details: {err['details']}")


async def main() -> None:
    if len(sys.argv) < 2:
        print("usage: python demo_mcp_create_schema.py <ProjectKey> [ItemId]")
        return

    args: Dict[str, Any] = {
        "CollectionName": "DemoItems",
        "SchemaName": "DemoItems",
        "Fields": [
            {"Name": "Title", "Type": "String"},
            {"Name": "Price", "Type": "Float"},
            {"Name": "Tags", "Type": "String", "IsArray": True},
        ],
        "ProjectKey": sys.argv[1],
    }

    if len(sys.argv) > 2:
        print("Calling MCP task: update_schema()")
        _print_result(await tasks.update_schema(ItemId=sys.argv[2], **args))
    else:
        print("Calling MCP task: create_schema()")
        _print_result(await tasks.create_schema(**args))


if __name__ == "__main__":
    asyncio.run(main())
