"""Services built on the atomic writer."""
