"""Spreadsheet file reading."""
