from ngsa.modules.app import create_app_command

cli = create_app_command()


def main():
    cli()

if __name__ == '__main__':
    main()
