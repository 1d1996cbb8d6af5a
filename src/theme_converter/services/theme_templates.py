"""Fixed skeletons for theme files that the source repository lacks.

Every function here is pure: the same arguments always render the same
text, which keeps the generated theme byte-for-byte reproducible.
"""

from __future__ import annotations

from html import escape

DEFAULT_INDEX_BODY = """\
get_header(); ?>

<main id="main" class="site-main">
    <?php if (have_posts()) : ?>
        <?php while (have_posts()) : the_post(); ?>
            <article id="post-<?php the_ID(); ?>" <?php post_class(); ?>>
                <header class="entry-header">
                    <h1 class="entry-title">
                        <a href="<?php the_permalink(); ?>"><?php the_title(); ?></a>
                    </h1>
                    <div class="entry-meta">
                        <span class="posted-on"><?php echo get_the_date(); ?></span>
                        <span class="byline">by <?php the_author(); ?></span>
                    </div>
                </header>

                <div class="entry-content">
                    <?php the_excerpt(); ?>
                </div>

                <footer class="entry-footer">
                    <a href="<?php the_permalink(); ?>" class="read-more">Read More</a>
                </footer>
            </article>
        <?php endwhile; ?>

        <?php the_posts_navigation(); ?>
    <?php else : ?>
        <p><?php esc_html_e('Sorry, no posts matched your criteria.'); ?></p>
    <?php endif; ?>
</main>

<?php get_sidebar(); ?>
<?php get_footer(); ?>"""

DEFAULT_HEADER = """\
<!DOCTYPE html>
<html <?php language_attributes(); ?>>
<head>
    <meta charset="<?php bloginfo('charset'); ?>">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <link rel="profile" href="https://gmpg.org/xfn/11">
    <?php wp_head(); ?>
</head>

<body <?php body_class(); ?>>
<?php wp_body_open(); ?>

<div id="page" class="site">
    <header id="masthead" class="site-header">
        <div class="site-branding">
            <?php if (has_custom_logo()) : ?>
                <?php the_custom_logo(); ?>
            <?php else : ?>
                <h1 class="site-title">
                    <a href="<?php echo esc_url(home_url('/')); ?>"><?php bloginfo('name'); ?></a>
                </h1>
                <?php if (get_bloginfo('description')) : ?>
                    <p class="site-description"><?php bloginfo('description'); ?></p>
                <?php endif; ?>
            <?php endif; ?>
        </div>

        <nav id="site-navigation" class="main-navigation">
            <?php
            wp_nav_menu(array(
                'theme_location' => 'primary',
                'menu_id'        => 'primary-menu',
                'fallback_cb'    => false,
            ));
            ?>
        </nav>
    </header>"""

FEATURES: tuple[str, ...] = (
    "Responsive design",
    "WordPress 6.0+ compatible",
    "Custom post types support",
    "Widget areas",
    "Navigation menus",
    "Custom logo support",
)

INSTALL_STEPS: tuple[str, ...] = (
    "Download the theme zip file",
    "Go to WordPress Admin > Appearance > Themes",
    'Click "Add New" > "Upload Theme"',
    "Upload the zip file and activate",
)

MAX_LISTED_ASSETS = 10


def _php_comment_safe(text: str) -> str:
    return " ".join(text.replace("*/", "* /").split())


def default_index(theme_name: str) -> str:
    return (
        "<?php\n"
        "/**\n"
        f" * {_php_comment_safe(theme_name)} - Main Template\n"
        " */\n"
        "\n" + DEFAULT_INDEX_BODY
    )


def default_header() -> str:
    return DEFAULT_HEADER


def default_footer(current_year: int, repo_name: str, home_url: str) -> str:
    return f"""\
    <footer id="colophon" class="site-footer">
        <div class="site-info">
            <p>&copy; {current_year} <?php bloginfo('name'); ?>. All rights reserved.</p>
            <p>Theme converted from <a href="{escape(home_url)}" target="_blank">{escape(repo_name)}</a></p>
        </div>

        <?php if (is_active_sidebar('footer-1')) : ?>
            <div class="footer-widgets">
                <?php dynamic_sidebar('footer-1'); ?>
            </div>
        <?php endif; ?>
    </footer>
</div><!-- #page -->

<?php wp_footer(); ?>
</body>
</html>"""


def functions_php(
    theme_name: str,
    prefix: str,
    domain: str,
    *,
    has_styles: bool,
    has_scripts: bool,
    script_path: str,
) -> str:
    """Render ``functions.php``; enqueue calls only for assets that exist."""
    enqueues: list[str] = []
    if has_styles:
        enqueues.append(
            "    // Enqueue main stylesheet\n"
            f"    wp_enqueue_style('{prefix}-style', get_stylesheet_uri(), array(), '1.0.0');\n"
        )
    if has_scripts:
        enqueues.append(
            "    // Enqueue JavaScript\n"
            f"    wp_enqueue_script('{prefix}-script', get_template_directory_uri() . "
            f"'/{script_path}', array('jquery'), '1.0.0', true);\n"
            "\n"
            "    // Enqueue comment reply script\n"
            "    if (is_singular() && comments_open() && get_option('thread_comments')) {\n"
            "        wp_enqueue_script('comment-reply');\n"
            "    }\n"
        )
    enqueue_block = "".join(enqueues) or "    // No stylesheets or scripts found in the source repository\n"

    return f"""\
<?php
/**
 * {_php_comment_safe(theme_name)} Theme Functions
 */

// Prevent direct access
if (!defined('ABSPATH')) {{
    exit;
}}

// Theme setup
function {prefix}_setup() {{
    add_theme_support('title-tag');
    add_theme_support('post-thumbnails');
    add_theme_support('html5', array(
        'search-form',
        'comment-form',
        'comment-list',
        'gallery',
        'caption',
        'style',
        'script'
    ));
    add_theme_support('custom-logo');
    add_theme_support('customize-selective-refresh-widgets');
    add_theme_support('responsive-embeds');
    add_theme_support('editor-styles');

    register_nav_menus(array(
        'primary' => esc_html__('Primary Menu', '{domain}'),
        'footer' => esc_html__('Footer Menu', '{domain}'),
    ));
}}
add_action('after_setup_theme', '{prefix}_setup');

// Enqueue styles and scripts
function {prefix}_scripts() {{
{enqueue_block}}}
add_action('wp_enqueue_scripts', '{prefix}_scripts');

// Custom excerpt length
function {prefix}_excerpt_length($length) {{
    return 30;
}}
add_filter('excerpt_length', '{prefix}_excerpt_length', 999);

// Custom excerpt more text
function {prefix}_excerpt_more($more) {{
    return '...';
}}
add_filter('excerpt_more', '{prefix}_excerpt_more');

// Widget areas
function {prefix}_widgets_init() {{
    register_sidebar(array(
        'name'          => esc_html__('Sidebar', '{domain}'),
        'id'            => 'sidebar-1',
        'description'   => esc_html__('Add widgets here.', '{domain}'),
        'before_widget' => '<section id="%1$s" class="widget %2$s">',
        'after_widget'  => '</section>',
        'before_title'  => '<h2 class="widget-title">',
        'after_title'   => '</h2>',
    ));

    register_sidebar(array(
        'name'          => esc_html__('Footer', '{domain}'),
        'id'            => 'footer-1',
        'description'   => esc_html__('Add widgets here.', '{domain}'),
        'before_widget' => '<section id="%1$s" class="widget %2$s">',
        'after_widget'  => '</section>',
        'before_title'  => '<h3 class="widget-title">',
        'after_title'   => '</h3>',
    ));
}}
add_action('widgets_init', '{prefix}_widgets_init');
"""


def readme(
    theme_name: str,
    description: str | None,
    home_url: str,
    image_paths: list[str],
) -> str:
    """Render the human-readable ``README.md`` shipped with the theme."""
    lines = [
        f"# {theme_name} WordPress Theme",
        "",
        f"This theme was automatically converted from the GitHub repository: {home_url}",
        "",
        "## Installation",
        "",
    ]
    lines += [f"{i}. {step}" for i, step in enumerate(INSTALL_STEPS, start=1)]
    lines += ["", "## Features", ""]
    lines += [f"- {feature}" for feature in FEATURES]
    lines += [
        "",
        "## Original Repository",
        "",
        description or "No description available",
        "",
        f"Repository: {home_url}",
    ]

    if image_paths:
        lines += ["", "## Original assets", ""]
        lines += [f"- `{path}`" for path in image_paths[:MAX_LISTED_ASSETS]]
        hidden = len(image_paths) - MAX_LISTED_ASSETS
        if hidden > 0:
            lines.append(f"- … and {hidden} more")
        lines += [
            "",
            "Images are not bundled; copy them from the repository if the templates need them.",
        ]

    lines += [
        "",
        "## Support",
        "",
        "This is an automatically converted theme. For issues related to the "
        "original design, please refer to the source repository.",
        "",
    ]
    return "\n".join(lines)
