from sitesmith.cli import main

main()
