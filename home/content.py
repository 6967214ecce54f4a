"""
Copy for the public landing page.
"""

FEATURES = [
    {
        'icon': 'shield',
        'title': 'Robust Security',
        'description': 'State-of-the-art encryption, 2FA, and KYC protocols to protect your assets and data.',
    },
    {
        'icon': 'bolt',
        'title': 'Fast Transactions',
        'description': 'Enjoy quick deposits, withdrawals, and P2P exchanges with our optimized system.',
    },
    {
        'icon': 'chart',
        'title': 'Competitive Rates',
        'description': 'Access favorable exchange rates by trading directly with other users on the platform.',
    },
]

STEPS = [
    {
        'title': 'Register & Verify',
        'description': 'Create your account and complete KYC verification quickly and securely.',
    },
    {
        'title': 'Fund Your Wallet',
        'description': 'Deposit NGN or other supported currencies into your multi-currency wallet.',
    },
    {
        'title': 'Trade P2P',
        'description': 'Browse offers or create your own to exchange currencies directly with other users.',
    },
]

ABOUT = [
    {
        'title': 'Who We Are',
        'description': (
            'A dedicated team of finance and technology experts committed to democratizing '
            'access to foreign exchange markets, empowering individuals globally.'
        ),
    },
    {
        'title': 'Our Mission',
        'description': (
            'To create a seamless, equitable global financial ecosystem where currency exchange '
            'is borderless, instant, and accessible to everyone, everywhere.'
        ),
    },
]

FAQ_ITEMS = [
    {
        'id': 'faq-1',
        'question': 'What is BELFX?',
        'answer': (
            'BELFX is a peer-to-peer (P2P) Forex platform that allows users to directly exchange '
            'currencies like NGN, USD, CAD, GBP, and EUR with each other securely and efficiently.'
        ),
    },
    {
        'id': 'faq-2',
        'question': 'How do I start trading on BELFX?',
        'answer': (
            'To start trading, you need to register for an account, complete the KYC (Know Your '
            'Customer) verification process, fund your wallet, and then you can browse existing '
            'offers or create your own in the marketplace.'
        ),
    },
    {
        'id': 'faq-3',
        'question': 'Is BELFX secure?',
        'answer': (
            'Yes, security is our top priority. We use state-of-the-art encryption, offer Two-Factor '
            'Authentication (2FA), and have robust KYC/AML protocols to protect your assets and '
            'personal information.'
        ),
    },
    {
        'id': 'faq-4',
        'question': 'What currencies can I trade?',
        'answer': (
            'Currently, BELFX supports NGN, USD, CAD, GBP, and EUR. '
            'We plan to add more currencies in the future.'
        ),
    },
    {
        'id': 'faq-5',
        'question': 'Are there any fees for trading?',
        'answer': (
            "BELFX aims to offer competitive and transparent fees. Please refer to our "
            "'Fees & Limits' page for detailed information on transaction fees."
        ),
    },
]

# In-page anchors on the landing page
SECTION_LINKS = [
    ('features', 'Features'),
    ('how-it-works', 'How It Works'),
    ('about', 'About Us'),
    ('faq', 'FAQ'),
]
