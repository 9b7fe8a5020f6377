"""Interactive selection and editor dispatch over scan findings."""
