"""Embedded templates for `ofcourse init`."""
