from sandbox_charts.cli import main


main()
