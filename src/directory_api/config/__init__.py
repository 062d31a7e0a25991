"""
Configuration management for the Directory API.

Contains Pydantic settings shared by the HTTP app, the CLI and the Lambda
entrypoint. Works against real AWS S3 or a LocalStack endpoint.
"""
