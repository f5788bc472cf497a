"""HTML, date, HTTP and file helpers."""
