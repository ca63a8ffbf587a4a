"""Core installer logic: configuration, paths, theming and orchestration."""
