"""HTTP interface for importing, inspecting and erasing listening history."""
