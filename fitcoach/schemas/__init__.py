"""Pydantic schemas for API payloads and derived read models."""
