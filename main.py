from roamjs_docs.cli import app

if __name__ == "__main__":
    app()
