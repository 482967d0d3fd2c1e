from hn_scraper.main import main

main()
