from toolchat.cli.manage import run

if __name__ == "__main__":
    run()
