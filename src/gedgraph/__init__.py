"""Parse GEDCOM text into a queryable person graph."""
