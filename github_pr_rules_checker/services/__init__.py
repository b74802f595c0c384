"""Services for collecting, reviewing and reporting on pull requests."""
