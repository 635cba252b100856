"""HTTP API exposing the profile acquisition pipeline to the web front end."""
