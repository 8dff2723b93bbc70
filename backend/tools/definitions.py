"""MCP tool descriptors (name, description, JSON Schema) for all 9 tools."""

_ACCOUNT_ID = {"type": "integer", "description": "The player account ID"}

TOOL_DEFINITIONS = [
    {
        "name": "get_match",
        "description": "Get detailed information about a specific Dota 2 match",
        "inputSchema": {
            "type": "object",
            "properties": {
                "match_id": {"type": "integer", "description": "The match ID to retrieve"},
            },
            "required": ["match_id"],
        },
    },
    {
        "name": "get_player",
        "description": "Get profile information for a specific player",
        "inputSchema": {
            "type": "object",
            "properties": {"account_id": _ACCOUNT_ID},
            "required": ["account_id"],
        },
    },
    {
        "name": "get_player_matches",
        "description": "Get match history for a specific player. Can filter by hero, game mode, and lobby type.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "account_id": _ACCOUNT_ID,
                "limit": {"type": "integer", "description": "Number of matches to return (default: 20)"},
                "hero_id": {"type": "integer", "description": "Filter by specific hero ID"},
                "game_mode": {"type": "integer", "description": "Filter by game mode ID"},
                "lobby_type": {"type": "integer", "description": "Filter by lobby type ID"},
            },
            "required": ["account_id"],
        },
    },
    {
        "name": "get_player_recent_matches",
        "description": "Get recent matches for a specific player",
        "inputSchema": {
            "type": "object",
            "properties": {"account_id": _ACCOUNT_ID},
            "required": ["account_id"],
        },
    },
    {
        "name": "get_player_heroes",
        "description": "Get hero statistics for a specific player",
        "inputSchema": {
            "type": "object",
            "properties": {"account_id": _ACCOUNT_ID},
            "required": ["account_id"],
        },
    },
    {
        "name": "search_players",
        "description": "Search for players by name. Returns matching players with their account IDs.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search term for player names"},
            },
            "required": ["query"],
        },
    },
    {
        "name": "get_heroes",
        "description": "Get list of all Dota 2 heroes",
        "inputSchema": {"type": "object", "properties": {}},
    },
    {
        "name": "get_pro_matches",
        "description": "Get recent professional matches",
        "inputSchema": {"type": "object", "properties": {}},
    },
    {
        "name": "natural_query",
        "description": (
            "Ask questions about Dota 2 matches and players in natural language, "
            "e.g. 'match 7234567890', 'recent matches for player 86745912', "
            "'heroes for player 86745912' or 'find player named \"Miracle\"'."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Natural language query about Dota 2 matches or players",
                },
            },
            "required": ["query"],
        },
    },
]
