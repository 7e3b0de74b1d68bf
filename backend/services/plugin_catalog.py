"""
Plugin and tool catalog

Metadata for WordPress plugins and standalone tools, keyed by the use cases
(``meta-titles``, ``large-images``, ``caching``...) that recommendations
carry. Used to show which installed plugins already cover an issue and which
alternatives are worth suggesting.
"""
import re
from typing import Dict, List, Optional

from schemas import PluginMetadata

_WORDPRESS_PLUGIN_DATA = [
    # SEO Plugins
    {
        'name': 'Yoast SEO',
        'slug': 'wordpress-seo',
        'category': 'seo',
        'use_case': ['meta-titles', 'meta-descriptions', 'h1-tags', 'seo-optimization'],
        'description': 'Most popular WordPress SEO plugin with comprehensive on-page optimization',
        'rating': 4.9,
        'reviews': 28650,
        'active_installs': '5+ million',
        'cost': 'Freemium',
        'pricing_details': 'Free version available. Premium: £99/year',
        'url': 'https://wordpress.org/plugins/wordpress-seo/',
        'free_tier_limits': 'Free version covers all basic SEO needs',
        'pros': [
            'User-friendly interface',
            'Real-time content analysis',
            'XML sitemap generation',
            'Breadcrumb navigation',
            'Social media integration'
        ],
        'cons': [
            'Can slow down admin area',
            'Premium features needed for advanced schemas',
            'Some features overlap with theme functionality'
        ],
        'best_for': 'Beginners and general WordPress sites'
    },
    {
        'name': 'Rank Math',
        'slug': 'seo-by-rank-math',
        'category': 'seo',
        'use_case': ['meta-titles', 'meta-descriptions', 'h1-tags', 'seo-optimization', 'schema-markup'],
        'description': 'Feature-rich SEO plugin with advanced schema markup and 404 monitoring',
        'rating': 4.9,
        'reviews': 6850,
        'active_installs': '1+ million',
        'cost': 'Freemium',
        'pricing_details': 'Free version very comprehensive. Pro: £59/year',
        'url': 'https://wordpress.org/plugins/seo-by-rank-math/',
        'free_tier_limits': 'Free version includes most features, even schema markup',
        'pros': [
            'More features in free version than competitors',
            'Built-in 404 monitor',
            'Google Search Console integration',
            'Local SEO support',
            'Advanced schema markup'
        ],
        'cons': [
            'Steeper learning curve',
            'Can be overwhelming for beginners',
            'Some advanced features require Pro'
        ],
        'best_for': 'Advanced users and SEO professionals'
    },
    {
        'name': 'All in One SEO',
        'slug': 'all-in-one-seo-pack',
        'category': 'seo',
        'use_case': ['meta-titles', 'meta-descriptions', 'h1-tags', 'seo-optimization'],
        'description': 'Original WordPress SEO plugin with solid features and good support',
        'rating': 4.6,
        'reviews': 4520,
        'active_installs': '3+ million',
        'cost': 'Freemium',
        'pricing_details': 'Free version available. Premium: £49.60/year',
        'url': 'https://wordpress.org/plugins/all-in-one-seo-pack/',
        'free_tier_limits': 'Free version covers basic SEO',
        'pros': [
            'Easy setup wizard',
            'Good for e-commerce',
            'WooCommerce integration',
            'TruSEO score analysis'
        ],
        'cons': [
            'Less features in free version compared to Rank Math',
            'Premium required for many features',
            'Interface less modern than competitors'
        ],
        'best_for': 'E-commerce sites and WooCommerce stores'
    },

    # Image Optimization Plugins
    {
        'name': 'Imagify',
        'slug': 'imagify',
        'category': 'images',
        'use_case': ['large-images', 'image-optimization', 'webp-conversion'],
        'description': 'Simple, powerful image compression with WebP conversion',
        'rating': 4.6,
        'reviews': 1280,
        'active_installs': '400,000+',
        'cost': 'Freemium',
        'pricing_details': 'Free: 20MB/month. Lite: £4.99/month (unlimited). Growth: £9.99/month',
        'url': 'https://wordpress.org/plugins/imagify/',
        'free_tier_limits': '20MB of images per month',
        'pros': [
            'Excellent compression quality',
            'Easy to use interface',
            'WebP and AVIF support',
            'Bulk optimization',
            'Resize images on upload'
        ],
        'cons': [
            'Free tier very limited (20MB)',
            'Requires cloud processing',
            'Monthly quota can run out quickly'
        ],
        'best_for': 'Sites with regular image uploads needing great compression'
    },
    {
        'name': 'ShortPixel Image Optimizer',
        'slug': 'shortpixel-image-optimiser',
        'category': 'images',
        'use_case': ['large-images', 'image-optimization', 'webp-conversion'],
        'description': 'Powerful image optimization with generous free tier',
        'rating': 4.8,
        'reviews': 3640,
        'active_installs': '400,000+',
        'cost': 'Freemium',
        'pricing_details': 'Free: 100 images/month. One-time credits: £9.99 for 10,000 images',
        'url': 'https://wordpress.org/plugins/shortpixel-image-optimiser/',
        'free_tier_limits': '100 images per month',
        'pros': [
            'Generous free tier (100 images/month)',
            'One-time credit purchase option',
            'WebP and AVIF support',
            'PDF optimization',
            'Smart adaptive images'
        ],
        'cons': [
            'Requires API key signup',
            'Cloud processing only',
            'Interface can be complex'
        ],
        'best_for': 'Sites with moderate image uploads, budget-conscious users'
    },
    {
        'name': 'EWWW Image Optimizer',
        'slug': 'ewww-image-optimizer',
        'category': 'images',
        'use_case': ['large-images', 'image-optimization', 'webp-conversion'],
        'description': 'Local or cloud image optimization with no monthly limits',
        'rating': 4.7,
        'reviews': 2340,
        'active_installs': '1+ million',
        'cost': 'Freemium',
        'pricing_details': 'Free: Local optimization. Premium: £7/month for cloud compression',
        'url': 'https://wordpress.org/plugins/ewww-image-optimizer/',
        'free_tier_limits': 'Unlimited with local optimization',
        'pros': [
            'No limits with local optimization',
            'No API key needed for free version',
            'WebP conversion',
            'Works on any hosting',
            'Lazy loading built-in'
        ],
        'cons': [
            'Local optimization less powerful',
            'Server resources intensive',
            'Cloud version needed for best results'
        ],
        'best_for': 'High-volume sites, users wanting unlimited free optimization'
    },
    {
        'name': 'Smush',
        'slug': 'wp-smushit',
        'category': 'images',
        'use_case': ['large-images', 'image-optimization', 'webp-conversion'],
        'description': 'Popular image optimizer by WPMU DEV with lazy loading',
        'rating': 4.8,
        'reviews': 4520,
        'active_installs': '1+ million',
        'cost': 'Freemium',
        'pricing_details': 'Free: 5MB per image limit. Pro: £6/month',
        'url': 'https://wordpress.org/plugins/wp-smushit/',
        'free_tier_limits': '5MB max file size, 50 images bulk optimization',
        'pros': [
            'Easy to use',
            'Unlimited free optimization',
            'Lazy loading included',
            'Automatic optimization',
            'Image resizing'
        ],
        'cons': [
            '5MB file size limit on free',
            'Less compression than competitors',
            'WebP requires Pro version'
        ],
        'best_for': 'Beginners wanting simple, unlimited free optimization'
    },

    # Performance & Caching Plugins
    {
        'name': 'WP Rocket',
        'slug': 'wp-rocket',
        'category': 'performance',
        'use_case': ['caching', 'minification', 'lazy-loading', 'performance-optimization', 'javascript-optimization', 'css-optimization'],
        'description': 'Premium all-in-one performance plugin - handles caching, JS/CSS optimization, lazy loading, and more',
        'rating': 4.9,
        'reviews': 8950,
        'active_installs': '2+ million',
        'cost': 'Paid',
        'pricing_details': 'Single: £59/year. Plus: £119/year. Infinite: £299/year',
        'url': 'https://wp-rocket.me/',
        'pros': [
            'Best overall performance plugin',
            'No configuration needed',
            'Automatic critical CSS',
            'Database optimization',
            'Cloudflare integration',
            'Excellent support'
        ],
        'cons': [
            'No free version',
            'Annual subscription required',
            'Some features overlap with hosting'
        ],
        'best_for': 'Serious sites willing to invest in performance'
    },
    {
        'name': 'W3 Total Cache',
        'slug': 'w3-total-cache',
        'category': 'caching',
        'use_case': ['caching', 'minification', 'performance-optimization'],
        'description': 'Comprehensive free caching plugin with advanced features',
        'rating': 4.3,
        'reviews': 3840,
        'active_installs': '1+ million',
        'cost': 'Freemium',
        'pricing_details': 'Free version very comprehensive. Pro: £99/year',
        'url': 'https://wordpress.org/plugins/w3-total-cache/',
        'free_tier_limits': 'Free version includes most features',
        'pros': [
            'Completely free core features',
            'CDN integration',
            'Extensive caching options',
            'Database caching',
            'Browser caching'
        ],
        'cons': [
            'Complex to configure',
            'Can break sites if misconfigured',
            'Support limited on free version'
        ],
        'best_for': 'Advanced users comfortable with caching configuration'
    },
    {
        'name': 'WP Super Cache',
        'slug': 'wp-super-cache',
        'category': 'caching',
        'use_case': ['caching', 'performance-optimization'],
        'description': 'Simple, reliable caching plugin by Automattic',
        'rating': 4.4,
        'reviews': 2560,
        'active_installs': '2+ million',
        'cost': 'Free',
        'url': 'https://wordpress.org/plugins/wp-super-cache/',
        'pros': [
            'Completely free',
            'Easy to setup',
            'Reliable and stable',
            'Works with CDNs',
            'Maintained by Automattic'
        ],
        'cons': [
            'Basic features only',
            'No minification',
            'Limited advanced options'
        ],
        'best_for': 'Beginners wanting simple free caching'
    },
    {
        'name': 'Autoptimize',
        'slug': 'autoptimize',
        'category': 'performance',
        'use_case': ['minification', 'css-optimization', 'javascript-optimization'],
        'description': 'Specialized plugin for minifying and optimizing CSS, JS, and HTML',
        'rating': 4.7,
        'reviews': 3420,
        'active_installs': '1+ million',
        'cost': 'Free',
        'url': 'https://wordpress.org/plugins/autoptimize/',
        'pros': [
            'Completely free',
            'Excellent CSS/JS optimization',
            'Defer non-critical CSS',
            'Remove render-blocking resources',
            'Works well with caching plugins'
        ],
        'cons': [
            'Can break sites if aggressive settings used',
            'No caching features',
            'Requires testing after setup'
        ],
        'best_for': 'Sites needing CSS/JS optimization to pair with caching'
    },
    {
        'name': 'LiteSpeed Cache',
        'slug': 'litespeed-cache',
        'category': 'caching',
        'use_case': ['caching', 'minification', 'image-optimization', 'performance-optimization'],
        'description': 'All-in-one optimization for LiteSpeed servers (works on any server)',
        'rating': 4.8,
        'reviews': 6240,
        'active_installs': '5+ million',
        'cost': 'Free',
        'url': 'https://wordpress.org/plugins/litespeed-cache/',
        'free_tier_limits': 'Some CDN features require LiteSpeed hosting',
        'pros': [
            'Completely free',
            'All-in-one solution',
            'Image optimization included',
            'Database optimization',
            'Works on any hosting (limited features)',
            'Best on LiteSpeed servers'
        ],
        'cons': [
            'Full features require LiteSpeed hosting',
            'Complex interface',
            'Some features competitive with hosting'
        ],
        'best_for': 'Sites on LiteSpeed hosting, or users wanting free all-in-one'
    },
    {
        'name': 'WP Fastest Cache',
        'slug': 'wp-fastest-cache',
        'category': 'caching',
        'use_case': ['caching', 'minification', 'performance-optimization'],
        'description': 'Simple, fast caching plugin with good free version',
        'rating': 4.7,
        'reviews': 4120,
        'active_installs': '1+ million',
        'cost': 'Freemium',
        'pricing_details': 'Free version available. Premium: £49.99 one-time',
        'url': 'https://wordpress.org/plugins/wp-fastest-cache/',
        'pros': [
            'Easy to use',
            'Fast and lightweight',
            'Cache preloading',
            'Mobile cache',
            'One-time premium payment'
        ],
        'cons': [
            'Basic features in free version',
            'Premium needed for image optimization',
            'No database optimization in free'
        ],
        'best_for': 'Users wanting simple, affordable caching'
    },

    # Additional Tools
    {
        'name': 'Asset CleanUp',
        'slug': 'wp-asset-clean-up',
        'category': 'performance',
        'use_case': ['css-optimization', 'javascript-optimization', 'performance-optimization'],
        'description': 'Unload unnecessary CSS/JS on specific pages to reduce bloat',
        'rating': 4.9,
        'reviews': 1850,
        'active_installs': '200,000+',
        'cost': 'Freemium',
        'pricing_details': 'Free version available. Pro: £69/year',
        'url': 'https://wordpress.org/plugins/wp-asset-clean-up/',
        'pros': [
            'Reduce plugin bloat',
            'Page-specific asset control',
            'Test mode for safe testing',
            'RegEx unloading support',
            'Combines well with other plugins'
        ],
        'cons': [
            'Manual configuration per page',
            'Can break functionality if misused',
            'Time-consuming to set up properly'
        ],
        'best_for': 'Advanced users dealing with plugin bloat'
    },
    {
        'name': 'Perfmatters',
        'slug': 'perfmatters',
        'category': 'performance',
        'use_case': ['performance-optimization', 'script-management', 'lazy-loading'],
        'description': 'Lightweight performance plugin for script management and optimization',
        'rating': 4.9,
        'reviews': 2150,
        'active_installs': '200,000+',
        'cost': 'Paid',
        'pricing_details': 'Personal: £24.95/year. Business: £49.95/year',
        'url': 'https://perfmatters.io/',
        'pros': [
            'Very lightweight',
            'Script manager',
            'Database optimization',
            'Lazy loading',
            'CDN integration',
            'No bloat'
        ],
        'cons': [
            'No free version',
            'Premium pricing',
            'Limited cache features'
        ],
        'best_for': 'Performance-focused sites wanting lightweight optimization'
    },

    # Lazy Loading Plugins
    {
        'name': 'a3 Lazy Load',
        'slug': 'a3-lazy-load',
        'category': 'performance',
        'use_case': ['lazy-loading', 'performance-optimization'],
        'description': 'Simple, effective lazy loading for images with automatic configuration',
        'rating': 4.7,
        'reviews': 840,
        'active_installs': '100,000+',
        'cost': 'Free',
        'url': 'https://wordpress.org/plugins/a3-lazy-load/',
        'pros': [
            'Completely free',
            'Works automatically after activation',
            'Lazy loads images, iframes, and videos',
            'Mobile optimized',
            'No configuration needed',
            'Lightweight'
        ],
        'cons': [
            'Basic features only',
            'No advanced options',
            'Limited customization'
        ],
        'best_for': 'Sites wanting simple, free lazy loading without configuration'
    },
    {
        'name': 'Jetpack',
        'slug': 'jetpack',
        'category': 'performance',
        'use_case': ['lazy-loading', 'performance-optimization', 'security'],
        'description': 'All-in-one WordPress plugin with free lazy loading, CDN, and security features',
        'rating': 3.9,
        'reviews': 5280,
        'active_installs': '5+ million',
        'cost': 'Freemium',
        'pricing_details': 'Free: Lazy loading + basic features. Premium: from £3.50/month',
        'url': 'https://wordpress.org/plugins/jetpack/',
        'free_tier_limits': 'Free tier includes lazy loading, CDN, basic security',
        'pros': [
            'Free lazy loading',
            'Free CDN for images',
            'Security features included',
            'Very active development',
            'WordPress.com integration'
        ],
        'cons': [
            'Heavy plugin (many features)',
            'Can slow down admin area',
            'Some features require paid plan',
            'Connects to WordPress.com'
        ],
        'best_for': 'Sites already using Jetpack or wanting multiple features in one plugin'
    },
    {
        'name': 'Lazy Load by WP Rocket',
        'slug': 'rocket-lazy-load',
        'category': 'performance',
        'use_case': ['lazy-loading', 'performance-optimization'],
        'description': 'Free standalone lazy loading plugin from the WP Rocket team',
        'rating': 4.4,
        'reviews': 520,
        'active_installs': '100,000+',
        'cost': 'Free',
        'url': 'https://wordpress.org/plugins/rocket-lazy-load/',
        'pros': [
            'Completely free',
            'From trusted WP Rocket team',
            'Lightweight',
            'Lazy loads images and iframes',
            'YouTube video thumbnails',
            'Easy to configure'
        ],
        'cons': [
            'No longer actively developed',
            'Basic features compared to paid WP Rocket',
            'Missing some advanced options'
        ],
        'best_for': 'Sites wanting free lazy loading from a reputable developer'
    }
]

_NON_WORDPRESS_TOOL_DATA = [
    {
        'name': 'TinyPNG',
        'slug': 'tinypng',
        'category': 'images',
        'use_case': ['large-images', 'image-optimization'],
        'description': 'Online tool for compressing PNG and JPEG images',
        'rating': 4.8,
        'reviews': 12500,
        'active_installs': 'Web-based',
        'cost': 'Freemium',
        'pricing_details': 'Free: 20 images at a time. API: £25 for 500 compressions',
        'url': 'https://tinypng.com/',
        'free_tier_limits': '20 images per upload session',
        'pros': [
            'Excellent compression',
            'Easy to use',
            'No signup required',
            'Batch processing',
            'API available'
        ],
        'cons': [
            'Manual upload process',
            '20 image limit per session',
            'No automation in free version'
        ],
        'best_for': 'Manual image optimization before upload'
    },
    {
        'name': 'Squoosh',
        'slug': 'squoosh',
        'category': 'images',
        'use_case': ['large-images', 'image-optimization', 'webp-conversion'],
        'description': 'Google\'s web app for image compression with visual comparison',
        'rating': 4.7,
        'reviews': 8500,
        'active_installs': 'Web-based',
        'cost': 'Free',
        'url': 'https://squoosh.app/',
        'pros': [
            'Completely free',
            'Visual quality comparison',
            'Modern format support (WebP, AVIF)',
            'Works offline (PWA)',
            'Privacy-focused (local processing)',
            'No limits'
        ],
        'cons': [
            'One image at a time',
            'No bulk processing',
            'Manual process'
        ],
        'best_for': 'Users wanting free, high-quality manual optimization'
    },
    {
        'name': 'ImageOptim',
        'slug': 'imageoptim',
        'category': 'images',
        'use_case': ['large-images', 'image-optimization'],
        'description': 'Mac app for lossless image optimization',
        'rating': 4.9,
        'reviews': 15200,
        'active_installs': 'Desktop app',
        'cost': 'Free',
        'url': 'https://imageoptim.com/',
        'pros': [
            'Completely free',
            'Drag-and-drop interface',
            'Lossless and lossy options',
            'Batch processing',
            'Preserves image quality'
        ],
        'cons': [
            'Mac only',
            'Desktop app required',
            'No WebP support in free version'
        ],
        'best_for': 'Mac users wanting local batch optimization'
    },

    # Internal Linking Plugins
    {
        'name': 'Link Whisper',
        'slug': 'link-whisper',
        'category': 'seo',
        'use_case': ['internal-linking', 'seo-optimization'],
        'description': 'AI-powered internal linking plugin that suggests relevant internal links',
        'rating': 4.9,
        'reviews': 625,
        'active_installs': '50,000+',
        'cost': 'Paid',
        'pricing_details': 'Starter: £77/year. Agency: £117/year',
        'url': 'https://linkwhisper.com/',
        'pros': [
            'AI-powered link suggestions',
            'Automatic internal linking',
            'Link reports and analytics',
            'Orphaned content detection',
            'Broken link fixing',
            'Very user-friendly'
        ],
        'cons': [
            'No free version',
            'Premium pricing',
            'Requires annual subscription'
        ],
        'best_for': 'Content-heavy sites wanting automated intelligent internal linking'
    },
    {
        'name': 'Internal Link Juicer',
        'slug': 'internal-links',
        'category': 'seo',
        'use_case': ['internal-linking', 'seo-optimization'],
        'description': 'Automatic internal linking based on keywords with customizable rules',
        'rating': 4.8,
        'reviews': 145,
        'active_installs': '10,000+',
        'cost': 'Freemium',
        'pricing_details': 'Free version available. Pro: £79/year',
        'url': 'https://wordpress.org/plugins/internal-links/',
        'free_tier_limits': 'Free version has basic auto-linking features',
        'pros': [
            'Automatic internal linking',
            'Keyword-based linking',
            'Link limits per post',
            'Blacklist/whitelist support',
            'Free version available',
            'Easy to configure'
        ],
        'cons': [
            'Less intelligent than AI solutions',
            'Can create too many links if not configured properly',
            'Pro needed for advanced features'
        ],
        'best_for': 'Sites wanting affordable automated internal linking'
    },
    {
        'name': 'Yet Another Related Posts Plugin (YARPP)',
        'slug': 'yet-another-related-posts-plugin',
        'category': 'seo',
        'use_case': ['internal-linking', 'seo-optimization'],
        'description': 'Shows related posts to improve internal linking and user engagement',
        'rating': 4.6,
        'reviews': 845,
        'active_installs': '100,000+',
        'cost': 'Freemium',
        'pricing_details': 'Free version available. Premium: £49/year',
        'url': 'https://wordpress.org/plugins/yet-another-related-posts-plugin/',
        'free_tier_limits': 'Free version has core features',
        'pros': [
            'Completely free core features',
            'Multiple display options',
            'Automatic related content',
            'Customizable algorithms',
            'Works with any theme'
        ],
        'cons': [
            'Only shows related posts (not inline linking)',
            'Can slow down sites with many posts',
            'Premium needed for advanced matching'
        ],
        'best_for': 'Sites wanting to increase internal linking through related posts'
    },

    # Structured Data / Schema Plugins
    {
        'name': 'Schema Pro',
        'slug': 'schema-pro',
        'category': 'seo',
        'use_case': ['schema-markup', 'structured-data', 'seo-optimization'],
        'description': 'Comprehensive schema markup plugin with support for 35+ schema types',
        'rating': 4.9,
        'reviews': 580,
        'active_installs': '200,000+',
        'cost': 'Paid',
        'pricing_details': 'Personal: £63/year. Agency Unlimited: £188/year',
        'url': 'https://wpschema.com/',
        'pros': [
            'Most comprehensive schema support',
            'Visual schema editor',
            'Automatic schema generation',
            'Custom schema types',
            'Google Rich Results compatible',
            'WooCommerce support'
        ],
        'cons': [
            'No free version',
            'Can be complex for beginners',
            'Premium pricing'
        ],
        'best_for': 'Professional sites needing comprehensive rich results'
    },
    {
        'name': 'Schema & Structured Data for WP & AMP',
        'slug': 'schema-and-structured-data-for-wp',
        'category': 'seo',
        'use_case': ['schema-markup', 'structured-data', 'seo-optimization'],
        'description': 'Free schema plugin with support for many schema types and AMP',
        'rating': 4.7,
        'reviews': 612,
        'active_installs': '100,000+',
        'cost': 'Freemium',
        'pricing_details': 'Free version very comprehensive. Pro: £49/year',
        'url': 'https://wordpress.org/plugins/schema-and-structured-data-for-wp/',
        'free_tier_limits': 'Free version includes 35+ schema types',
        'pros': [
            'Generous free version',
            'Easy to use interface',
            'AMP compatibility',
            'Automatic schema generation',
            'Regular updates',
            'Google validation'
        ],
        'cons': [
            'Some advanced features need Pro',
            'Documentation could be better',
            'Interface less polished than premium options'
        ],
        'best_for': 'Sites wanting free comprehensive schema markup'
    },

    # Redirect Management Plugins
    {
        'name': 'Redirection',
        'slug': 'redirection',
        'category': 'seo',
        'use_case': ['redirects', '404-errors', 'seo-optimization'],
        'description': 'Most popular redirect manager for WordPress with comprehensive 404 monitoring',
        'rating': 4.8,
        'reviews': 2150,
        'active_installs': '2+ million',
        'cost': 'Free',
        'url': 'https://wordpress.org/plugins/redirection/',
        'pros': [
            'Completely free',
            'Track 404 errors automatically',
            'Import/export redirects',
            'Regular expressions support',
            'Conditional redirects',
            'Monitor all redirects'
        ],
        'cons': [
            'Can be complex for beginners',
            'No premium support',
            'Interface could be more modern'
        ],
        'best_for': 'Sites needing comprehensive redirect management and 404 tracking'
    },
    {
        'name': 'Simple 301 Redirects',
        'slug': 'simple-301-redirects',
        'category': 'seo',
        'use_case': ['redirects', '404-errors'],
        'description': 'Lightweight plugin for simple 301 redirects without extra features',
        'rating': 4.5,
        'reviews': 284,
        'active_installs': '100,000+',
        'cost': 'Free',
        'url': 'https://wordpress.org/plugins/simple-301-redirects/',
        'pros': [
            'Extremely simple and lightweight',
            'No learning curve',
            'Fast and efficient',
            'No database bloat',
            'Perfect for basic needs'
        ],
        'cons': [
            'No 404 monitoring',
            'No wildcard redirects',
            'Limited to simple redirects',
            'No advanced features'
        ],
        'best_for': 'Users wanting simple redirect functionality without complexity'
    },
    {
        'name': 'Safe Redirect Manager',
        'slug': 'safe-redirect-manager',
        'category': 'seo',
        'use_case': ['redirects', '404-errors'],
        'description': 'Developer-friendly redirect plugin by 10up with clean interface',
        'rating': 4.7,
        'reviews': 147,
        'active_installs': '100,000+',
        'cost': 'Free',
        'url': 'https://wordpress.org/plugins/safe-redirect-manager/',
        'pros': [
            'Clean, modern interface',
            'Supports HTTP status codes',
            'Wildcard redirects',
            'Import/export',
            'Developer hooks available',
            'No database overhead'
        ],
        'cons': [
            'No 404 monitoring',
            'Fewer features than Redirection',
            'Less popular/tested'
        ],
        'best_for': 'Developers and users wanting a clean, efficient redirect solution'
    },
    {
        'name': 'WP SEO Structured Data Schema',
        'slug': 'wp-seo-structured-data-schema',
        'category': 'seo',
        'use_case': ['schema-markup', 'seo-optimization'],
        'description': 'Lightweight free schema plugin with focus on essential schema types',
        'rating': 4.4,
        'reviews': 234,
        'active_installs': '50,000+',
        'cost': 'Free',
        'url': 'https://wordpress.org/plugins/wp-seo-structured-data-schema/',
        'pros': [
            'Completely free',
            'Lightweight and fast',
            'Easy setup wizard',
            'No coding required',
            'Automatic JSON-LD output',
            'Works with all themes'
        ],
        'cons': [
            'Limited schema types',
            'Basic features only',
            'Less frequent updates',
            'Smaller user base'
        ],
        'best_for': 'Simple sites needing basic Organization and Article schemas'
    }
]



WORDPRESS_PLUGINS: List[PluginMetadata] = [PluginMetadata(**entry) for entry in _WORDPRESS_PLUGIN_DATA]
NON_WORDPRESS_TOOLS: List[PluginMetadata] = [PluginMetadata(**entry) for entry in _NON_WORDPRESS_TOOL_DATA]

# Map issue types to use cases
ISSUE_TO_USE_CASE: Dict[str, str] = {
    'missing-h1': 'h1-tags',
    'missing-meta-titles': 'meta-titles',
    'missing-meta-descriptions': 'meta-descriptions',
    'large-images': 'large-images',
    'image-optimization': 'image-optimization',
    'caching': 'caching',
    'minification': 'minification',
    'css-optimization': 'css-optimization',
    'javascript-optimization': 'javascript-optimization',
    'performance-optimization': 'performance-optimization',
    'internal-linking': 'internal-linking',
    'low-internal-links': 'internal-linking',
    '404-errors': '404-errors',
    'broken-links': '404-errors',
    'redirects': 'redirects',
    'structured-data': 'structured-data',
    'schema-markup': 'schema-markup',
    'invalid-schema': 'schema-markup',
    'unminified-files': 'minification',
    'unminified-javascript': 'javascript-optimization',
    'unminified-css': 'css-optimization',
}

COST_ORDER = {'Free': 0, 'Freemium': 1, 'Paid': 2}
SORT_FIELDS = ('rating', 'reviews', 'cost', 'active_installs')


def all_plugins() -> List[PluginMetadata]:
    return WORDPRESS_PLUGINS + NON_WORDPRESS_TOOLS


def _matches_installed(plugin: PluginMetadata, installed: str) -> bool:
    # Either side may contain the other: "Yoast SEO Premium" or just "yoast"
    installed_lower = installed.lower()
    name_lower = plugin.name.lower()
    slug_lower = plugin.slug.lower()
    return (
        name_lower in installed_lower
        or installed_lower in name_lower
        or slug_lower in installed_lower
        or installed_lower in slug_lower
    )


def is_plugin_installed(plugin: PluginMetadata, installed_plugins: List[str]) -> bool:
    """Check whether a catalog plugin appears in the detected plugin names"""
    return any(_matches_installed(plugin, installed) for installed in installed_plugins if installed)


def get_plugins_by_use_case(use_case: str, installed_plugins: Optional[List[str]] = None) -> List[PluginMetadata]:
    """
    Return every catalog entry that covers a use case.
    Installed plugins come first, then the rest by rating (highest first).
    """
    installed_plugins = installed_plugins or []
    matching = [plugin for plugin in all_plugins() if use_case in plugin.use_case]
    return sorted(
        matching,
        key=lambda plugin: (not is_plugin_installed(plugin, installed_plugins), -plugin.rating),
    )


def plugin_quality_score(plugin: PluginMetadata) -> int:
    """Score a plugin out of 100 from rating, reviews, install base and cost"""
    score = plugin.rating * 10

    # Reviews (0-20 points)
    if plugin.reviews > 10000:
        score += 20
    elif plugin.reviews > 5000:
        score += 15
    elif plugin.reviews > 2000:
        score += 10
    elif plugin.reviews > 1000:
        score += 5

    # Active installs (0-20 points)
    installs = plugin.active_installs.lower()
    if '5+' in installs or 'million' in installs:
        score += 20
    elif '3+' in installs or '2+' in installs or '1+' in installs:
        score += 15
    elif '400,000' in installs or '500,000' in installs:
        score += 10
    elif '200,000' in installs:
        score += 5

    # Cost (0-10 points)
    if plugin.cost == 'Free':
        score += 10
    elif plugin.cost == 'Freemium':
        score += 5

    return round(score)


def is_better_than_installed(plugin: PluginMetadata, installed: List[PluginMetadata]) -> bool:
    """A replacement is only worth suggesting if it beats the best installed one by more than 10 points"""
    if not installed:
        return True
    best_installed = max(plugin_quality_score(p) for p in installed)
    return plugin_quality_score(plugin) > best_installed + 10


def get_installed_plugins(plugins: List[PluginMetadata], installed_names: List[str]) -> List[PluginMetadata]:
    return [plugin for plugin in plugins if is_plugin_installed(plugin, installed_names)]


def get_non_installed_plugins(plugins: List[PluginMetadata], installed_names: List[str]) -> List[PluginMetadata]:
    """
    Plugins not yet installed that are worth suggesting.
    With nothing installed every alternative is shown; otherwise only ones
    that clearly beat what the site already runs.
    """
    installed = get_installed_plugins(plugins, installed_names)
    return [
        plugin for plugin in plugins
        if not is_plugin_installed(plugin, installed_names)
        and is_better_than_installed(plugin, installed)
    ]


def _installs_value(plugin: PluginMetadata) -> int:
    """'5+ million' -> 5000000, '400,000+' -> 400000, 'Web-based' -> 0"""
    installs = plugin.active_installs.lower()
    match = re.search(r'\d[\d,]*', installs)
    if not match:
        return 0
    value = int(match.group().replace(',', ''))
    if 'million' in installs:
        value *= 1_000_000
    return value


def sort_plugins(
    plugins: List[PluginMetadata],
    sort_field: str = 'rating',
    direction: str = 'desc',
    cost_filter: Optional[str] = None,
) -> List[PluginMetadata]:
    """Filter by cost and sort for the plugin table. 'desc' puts the largest value (or the priciest tier) first."""
    if sort_field not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field: {sort_field}")
    if direction not in ('asc', 'desc'):
        raise ValueError(f"Unknown sort direction: {direction}")

    if cost_filter and cost_filter != 'all':
        plugins = [plugin for plugin in plugins if plugin.cost == cost_filter]

    if sort_field == 'cost':
        key = lambda plugin: COST_ORDER[plugin.cost]  # noqa: E731
    elif sort_field == 'active_installs':
        key = _installs_value
    else:
        key = lambda plugin: getattr(plugin, sort_field)  # noqa: E731

    return sorted(plugins, key=key, reverse=(direction == 'desc'))
