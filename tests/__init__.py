"""
PDQ Test Suite.

- unit: normalization, guard, selector, paging, fallback, formatting,
  configuration, GraphQL client and schemas
- integration: full tool calls and the MCP server against a fake adapter
"""
