"""Users domain library: models, validation, query building and stores."""
