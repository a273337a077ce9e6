"""Domain layer: collaborator protocols and error constants."""
