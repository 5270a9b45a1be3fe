"""Pure value objects and algorithms: locators, resolution, copy-on-write updates."""
