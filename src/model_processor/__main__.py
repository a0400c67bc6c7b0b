from model_processor.cli import main

main()
