"""Bundle Rust AWS Lambda functions with cargo lambda, on the host or in Docker."""

__version__ = "0.1.0"
