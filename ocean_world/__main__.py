"""
Allow running as module: python -m ocean_world
Headless rendering:      python -m ocean_world --headless
"""

if __name__ == "__main__":
    from .main import main
    main()
