"""Command-line front end for the pocketbook ledger."""
