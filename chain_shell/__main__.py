from .cli import script_entry_point


if __name__ == "__main__":
    script_entry_point()
