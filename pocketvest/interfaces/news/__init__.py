"""HTTP interface for the news bounded context."""
