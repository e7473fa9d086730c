from truthbubble import create_app

app = create_app()

if __name__ == "__main__":
    # Use env vars or a .env file for keys; a real deployment runs behind gunicorn
    app.run(debug=True)
