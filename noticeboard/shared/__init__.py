"""Shared cross-cutting helpers: telemetry and utilities."""
