"""Read-only HTTP explorer for an endsong listening history."""
