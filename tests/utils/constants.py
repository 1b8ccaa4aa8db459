"""Values shared by fixtures and tests."""

BUCKET = "test-bucket"
PUBLIC_PREFIX = "https://storage.example.com/test-bucket"
