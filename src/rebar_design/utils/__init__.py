# Shared constants and geometry helpers
