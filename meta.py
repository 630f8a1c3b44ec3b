import os

name = 'flextype'
version = '0.1.0'
description = 'Infer, coerce, and lock the types of loosely-typed values'
url = 'https://github.com/flextype/flextype-python'
author = 'FlexType contributors'
author_email = ''

with open(os.path.join(os.path.dirname(__file__), 'README.md'), encoding = 'utf-8') as f:
    long_description = f.read()
