"""Core navigation, breadcrumb and theme logic."""
