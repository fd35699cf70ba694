"""HTTP API exposing the expense viewer core."""
