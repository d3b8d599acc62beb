"""Platform services shared by the path and batch layers."""
