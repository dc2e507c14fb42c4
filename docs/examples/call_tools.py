import asyncio
import json
import os
import shlex

from dotenv import load_dotenv
from mcp import ClientSession
from mcp.client.streamable_http import streamablehttp_client

# Load environment variables
load_dotenv()


async def main() -> None:
    """
    Small interactive client for a running sample-users-mcp server.

    Type a tool name followed by key=value arguments, e.g. ``get_user id=a1b2c3d4``.
    """
    url = os.getenv("MCP_URL", f"http://127.0.0.1:{os.getenv('PORT', '3001')}/mcp")
    print(f"Connecting to {url}")

    async with streamablehttp_client(url) as (read_stream, write_stream, _):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()
            listing = await session.list_tools()
            for tool in listing.tools:
                print(f"  {tool.name}: {tool.description}")

            print("\nCall a tool. Type 'exit' or 'quit' to stop.")
            while True:
                line = input("\n> ").strip()
                if line.lower() in ["exit", "quit"]:
                    print("Goodbye!")
                    break

                if not line:
                    continue

                name, *pairs = shlex.split(line)
                arguments = dict(pair.split("=", 1) for pair in pairs if "=" in pair)
                result = await session.call_tool(name, arguments)
                if result.isError:
                    print(f"Error: {json.dumps(result.structuredContent, indent=2)}")
                else:
                    print(result.content[0].text)


if __name__ == "__main__":
    asyncio.run(main())
