"""Entrypoints into mysql_readonly."""
