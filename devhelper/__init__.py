"""Dev Helper MCP server.

Exposes a fixed catalog of MERN scaffolding tools (project skeletons, React
components, Express routes, Mongoose models, Docker and env files, npm
scripts) over the Model Context Protocol.
"""

__version__ = "1.0.0"
