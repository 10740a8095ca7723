from busseva_mcp.server import main

main()
