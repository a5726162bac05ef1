"""Dispatcher, form builder, pagination and logging utilities."""
