#! /usr/bin/env python3

# Symbol hardware wallet interaction script

if __name__ == '__main__':
    from symhwilib._cli import main
    main()
else:
    raise ImportError('symhwi is not importable. Import symhwilib instead')
