"""Bundle-size, component and project-layout checks for TypeScript, React and Next.js projects."""

__version__ = "0.2.1"