from mp3clip.cli import main

main()
