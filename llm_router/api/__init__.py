"""HTTP routers for the router service."""
