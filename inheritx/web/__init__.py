"""HTTP handlers and Flask blueprints."""