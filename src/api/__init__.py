"""HTTP surface for the contact map."""
