"""Logging configuration and Prometheus instrumentation."""
