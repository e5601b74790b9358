"""Core building blocks shared by the RAPPOR client packages."""
